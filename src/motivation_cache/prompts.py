"""Prompt text for motivational message generation."""

FALLBACK_MESSAGE = "¡Sigue adelante! Estás progresando."

MAX_WORDS = 16

MESSAGE_PROMPT = (
    "Eres un asistente que genera un mensaje motivacional POSITIVO y MUY breve, "
    "en una sola línea, sin emojis, para un usuario sobre su {category} "
    "con puntaje {score:g} (0–5). Máximo {max_words} palabras."
)


def build_message_prompt(category: str, score: float) -> str:
    """Render the generation prompt for a category and clamped score."""
    return MESSAGE_PROMPT.format(category=category, score=score, max_words=MAX_WORDS)


def normalize_message(text: str | None) -> str:
    """Collapse provider output into a single line, or fall back when empty."""
    if not text:
        return FALLBACK_MESSAGE
    line = " ".join(text.split())
    return line or FALLBACK_MESSAGE
