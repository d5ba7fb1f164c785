"""Error kinds raised by the message cache core."""


class MotivationCacheError(Exception):
    """Base class for errors surfaced to the HTTP layer."""


class ValidationError(MotivationCacheError):
    """Request input is missing or malformed.

    Raised before any generator call or cache mutation.
    """


class GenerationError(MotivationCacheError):
    """The text-generation collaborator failed or timed out.

    The stored entry for the key, if any, is left untouched.
    """
