"""
Error types and secure error reporting.

Services raise ``PostNotFoundError`` when an operation requires an
existing post; repositories raise ``PersistenceError`` when the
underlying store fails.  ``log_and_sanitize_error`` logs the full
failure server-side and returns a message that is safe to send to
clients.
"""

import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)


class PostNotFoundError(ValueError):
    """Raised when a post with the requested id does not exist."""

    def __init__(self, post_id: str) -> None:
        super().__init__(f"Post {post_id} not found")
        self.post_id = post_id


class PersistenceError(RuntimeError):
    """Raised when the persistence layer is unreachable or fails."""


def log_and_sanitize_error(
    error: Exception,
    context: str,
    user_message: Optional[str] = None,
) -> tuple[str, str]:
    """Log full error details and return a sanitized message for the client.

    Args:
        error: The exception that occurred
        context: Description of what failed (e.g. ``"GET /posts"``)
        user_message: Optional custom message to show the client.

    Returns:
        Tuple of (sanitized_message, error_id)
    """
    error_id = uuid.uuid4().hex[:8]

    logger.error(
        "%s failed [%s]: %s: %s",
        context,
        error_id,
        type(error).__name__,
        error,
        exc_info=error,
    )

    if user_message:
        sanitized = f"{user_message} (Error ID: {error_id})"
    else:
        sanitized = f"{context} failed. Please try again later. (Error ID: {error_id})"
    return sanitized, error_id
