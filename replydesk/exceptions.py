"""Custom exception classes for ReplyDesk."""

from typing import Optional, Dict, Any


class ReplyDeskError(Exception):
    """Base exception for application errors."""

    ERROR_CODE = "REPLYDESK_001"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize exception with message, code, and optional details.

        Args:
            message: Error message
            error_code: Optional error code override
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.error_code = error_code or self.ERROR_CODE
        self.details = details or {}


class RecordNotFoundError(ReplyDeskError):
    """Raised when a feedback record does not exist."""

    ERROR_CODE = "RECORD_404"

    def __init__(self, record_id: Any):
        super().__init__(f"Record not found: {record_id}", details={"record_id": str(record_id)})


class EmbeddingError(ReplyDeskError):
    """Raised when embedding generation fails."""

    ERROR_CODE = "EMBED_001"


class GenerationError(ReplyDeskError):
    """Raised when the language model call fails or returns nothing usable."""

    ERROR_CODE = "LLM_001"


class ConfigurationError(ReplyDeskError):
    """Raised when configuration is invalid."""

    ERROR_CODE = "CONFIG_001"


class ValidationError(ReplyDeskError):
    """Raised when input validation fails."""

    ERROR_CODE = "VALIDATION_001"


class RateLimitedError(EmbeddingError):
    """Raised when the embeddings API is still rate limiting after every retry."""

    ERROR_CODE = "RATE_001"
