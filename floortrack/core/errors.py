import logging
from typing import NoReturn, Union

from fastapi import HTTPException

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_CODE = "23505"


def extract_store_error(error: Exception) -> str:
    """
    Pull a readable message out of Supabase client errors.
    PostgREST and GoTrue errors carry a `message` attribute; anything else
    falls back to its first argument or its string form.
    """
    message = getattr(error, "message", None)
    if message:
        return str(message)
    if error.args:
        return str(error.args[0])
    return str(error)


def is_unique_violation(error: Exception) -> bool:
    """True if the store rejected a write because of a unique constraint."""
    if getattr(error, "code", None) == UNIQUE_VIOLATION_CODE:
        return True
    detail = extract_store_error(error).lower()
    return "duplicate key" in detail or "unique" in detail or UNIQUE_VIOLATION_CODE in detail


def store_error(error: Exception, operation: str, detail: str) -> NoReturn:
    """Log an unexpected store failure and answer with a generic 500."""
    logger.error(f"{operation} failed: {extract_store_error(error)}", exc_info=error)
    raise HTTPException(status_code=500, detail=detail)


def parse_id(value: Union[str, int]) -> int:
    """Parse a decimal identifier taken from a path or body."""
    text = str(value)
    if not text.isdigit() or not text.isascii():
        raise HTTPException(status_code=400, detail=f"Invalid ID: {text}")
    return int(text)
