"""
Tests for the OpenAI and Ollama message generators, without network access.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from motivation_cache.exceptions import GenerationError
from motivation_cache.prompts import FALLBACK_MESSAGE, build_message_prompt, normalize_message
from motivation_cache.repositories import OllamaMessageGenerator, OpenAIMessageGenerator


def fake_openai_client(**create_kwargs):
    return SimpleNamespace(
        responses=SimpleNamespace(create=AsyncMock(**create_kwargs)),
        models=SimpleNamespace(retrieve=AsyncMock()),
        close=AsyncMock(),
    )


def ollama_client(handler):
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def test_prompt_mentions_category_and_score():
    prompt = build_message_prompt("Puntualidad", 4.8)

    assert "Puntualidad" in prompt
    assert "4.8" in prompt
    assert "16 palabras" in prompt


def test_normalize_message():
    assert normalize_message("  ¡Bien hecho!\n Sigue así.  ") == "¡Bien hecho! Sigue así."
    assert normalize_message("") == FALLBACK_MESSAGE
    assert normalize_message(" \n ") == FALLBACK_MESSAGE
    assert normalize_message(None) == FALLBACK_MESSAGE


@pytest.mark.asyncio
async def test_openai_generate_uses_responses_api():
    client = fake_openai_client(return_value=SimpleNamespace(output_text="¡Vas muy bien!"))
    generator = OpenAIMessageGenerator(model_name="gpt-4o-mini", temperature=0.7, client=client)

    message = await generator.generate("Trato", 3.5)

    assert message == "¡Vas muy bien!"
    kwargs = client.responses.create.call_args.kwargs
    assert kwargs["model"] == "gpt-4o-mini"
    assert kwargs["temperature"] == 0.7
    assert "Trato" in kwargs["input"]


@pytest.mark.asyncio
async def test_openai_reads_nested_output_when_helper_is_empty():
    response = SimpleNamespace(
        output_text=None,
        output=[SimpleNamespace(content=[SimpleNamespace(text="Sigue así")])],
    )
    generator = OpenAIMessageGenerator(client=fake_openai_client(return_value=response))

    assert await generator.generate("Trato", 3.5) == "Sigue así"


@pytest.mark.asyncio
async def test_openai_empty_output_falls_back():
    response = SimpleNamespace(output_text="", output=[])
    generator = OpenAIMessageGenerator(client=fake_openai_client(return_value=response))

    assert await generator.generate("Trato", 3.5) == FALLBACK_MESSAGE


@pytest.mark.asyncio
async def test_openai_transport_error_is_generation_error():
    error = openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/responses"))
    generator = OpenAIMessageGenerator(client=fake_openai_client(side_effect=error))

    with pytest.raises(GenerationError) as exc_info:
        await generator.generate("Trato", 3.5)

    assert exc_info.value.__cause__ is error


@pytest.mark.asyncio
async def test_openai_close_releases_client():
    client = fake_openai_client()
    generator = OpenAIMessageGenerator(client=client)

    await generator.close()

    client.close.assert_awaited_once()


@pytest.mark.asyncio
async def test_ollama_generate():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.read()
        return httpx.Response(200, json={"response": "  ¡Excelente\nprogreso!  "})

    generator = OllamaMessageGenerator(
        model_name="llama3.2",
        base_url="http://ollama:11434/",
        client=ollama_client(handler),
    )

    message = await generator.generate("Puntualidad", 5.0)

    assert message == "¡Excelente progreso!"
    assert seen["url"] == "http://ollama:11434/api/generate"
    assert b'"stream":false' in seen["body"].replace(b" ", b"")
    assert "Puntualidad".encode() in seen["body"]


@pytest.mark.asyncio
async def test_ollama_missing_text_falls_back():
    generator = OllamaMessageGenerator(
        client=ollama_client(lambda request: httpx.Response(200, json={"done": True}))
    )

    assert await generator.generate("Trato", 1.0) == FALLBACK_MESSAGE


@pytest.mark.asyncio
async def test_ollama_http_error_is_generation_error():
    generator = OllamaMessageGenerator(
        client=ollama_client(lambda request: httpx.Response(500, json={"error": "boom"}))
    )

    with pytest.raises(GenerationError):
        await generator.generate("Trato", 1.0)


@pytest.mark.asyncio
async def test_ollama_is_available_checks_model_list():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"models": [{"name": "llama3.2:latest"}]})

    available = OllamaMessageGenerator(model_name="llama3.2", client=ollama_client(handler))
    missing = OllamaMessageGenerator(model_name="mistral", client=ollama_client(handler))

    assert await available.is_available() is True
    assert await missing.is_available() is False


def test_build_generator_follows_provider_setting():
    from motivation_cache.api.dependencies import build_generator

    assert isinstance(build_generator("openai"), OpenAIMessageGenerator)
    assert isinstance(build_generator("ollama"), OllamaMessageGenerator)
    with pytest.raises(ValueError):
        build_generator("cohere")
