"""
Custom exception classes for the npc memory application.

HTTP-facing errors subclass HTTPException so routers can raise them directly.
Domain errors are plain exceptions that never cross the session boundary.
"""

from fastapi import HTTPException, status


class ChatNotFoundError(HTTPException):
    """Raised when a requested chat does not exist."""

    def __init__(self, chat_id: int):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"Chat with id {chat_id} not found")


class MessageNotFoundError(HTTPException):
    """Raised when a message index is outside the chat."""

    def __init__(self, chat_id: int, position: int):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Message {position} not found in chat {chat_id}",
        )


class RecordNotFoundError(LookupError):
    """Raised when a category store has no record with the given id."""

    def __init__(self, category: str, record_id: str):
        self.category = category
        self.record_id = record_id
        super().__init__(f"No record with id {record_id} in {category}")


class RulesFetchError(RuntimeError):
    """Raised when the default rules document cannot be retrieved."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Failed to fetch default rules from {url}: {reason}")


class ConfigurationError(ValueError):
    """Raised when there's an error in configuration parsing or validation."""

    def __init__(self, message: str):
        super().__init__(f"Configuration error: {message}")
