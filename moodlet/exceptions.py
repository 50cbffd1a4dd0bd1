"""
Standardized exception hierarchy for moodlet
Provides rich context, consistent logging, and user-friendly error messages

Game-rule failures (insufficient points, duplicate purchases, re-earned
badges, re-reviewed weeks) are NOT exceptions: the engine reports them as
boolean/zero results. Exceptions are reserved for programming errors and
failures at the call boundary.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


class MoodletError(Exception):
    """
    Base exception for all moodlet errors

    Provides:
    - Automatic timestamping
    - Request ID for tracing
    - User-friendly messages
    - Structured context
    - Automatic logging

    Example:
        raise MoodletError(
            message="Failed to save profile",
            profile_id="a1b2",
            operation="record_check_in",
            context={"entry_id": "abc-123"}
        )
    """

    def __init__(
        self,
        message: str,
        profile_id: Optional[str] = None,
        request_id: Optional[str] = None,
        operation: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        user_message: Optional[str] = None
    ):
        super().__init__(message)
        self.message = message
        self.profile_id = profile_id
        self.request_id = request_id or str(uuid4())
        self.operation = operation
        self.context = context or {}
        self.cause = cause
        self.user_message = user_message or "An unexpected error occurred. Please try again."
        self.timestamp = datetime.now(timezone.utc)

        # Auto-log on creation
        self._log_error()

    def _log_error(self) -> None:
        """Log error with full context"""
        log_data = {
            "error_type": self.__class__.__name__,
            "error_message": self.message,
            "request_id": self.request_id,
            "profile_id": self.profile_id,
            "operation": self.operation,
            "error_context": self.context,
            "timestamp": self.timestamp.isoformat()
        }

        if self.cause:
            log_data["cause"] = str(self.cause)
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data, exc_info=self.cause)
        else:
            logger.error(f"{self.__class__.__name__}: {self.message}", extra=log_data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize exception for presentation-layer responses"""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "user_message": self.user_message,
            "request_id": self.request_id,
            "timestamp": self.timestamp.isoformat()
        }


# ==========================================
# Validation Errors (Caller Input)
# ==========================================

class ValidationError(MoodletError):
    """
    Raised when caller input fails validation

    Examples:
    - Negative point award
    - Week key that is not a calendar day

    Example:
        raise ValidationError(
            message="Amount must be non-negative",
            field="amount",
            value=-5
        )
    """

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        value: Optional[Any] = None,
        **kwargs
    ):
        self.field = field
        self.value = value
        super().__init__(
            message=message,
            user_message=f"Invalid {field}: {message}" if field else message,
            context={"field": field, "value": value},
            **kwargs
        )


# ==========================================
# Store Errors
# ==========================================

class StoreError(MoodletError):
    """
    Base class for profile store failures
    """

    def __init__(self, message: str, **kwargs):
        kwargs.setdefault("user_message", "Unable to save your data. Please try again.")
        super().__init__(message=message, **kwargs)


class RecordNotFoundError(StoreError):
    """Requested record does not exist in the store"""

    def __init__(
        self,
        message: str,
        record_type: Optional[str] = None,
        record_id: Optional[str] = None,
        **kwargs
    ):
        self.record_type = record_type
        self.record_id = record_id
        super().__init__(
            message=message,
            user_message=f"{record_type or 'Record'} not found.",
            context={"record_type": record_type, "record_id": record_id},
            **kwargs
        )


# ==========================================
# Shop Errors
# ==========================================

class ShopError(MoodletError):
    """Shop operation rejected at the call boundary"""
    pass


class OwnershipError(ShopError):
    """Equip target is not owned by the profile"""

    def __init__(
        self,
        message: str,
        item_id: Optional[str] = None,
        **kwargs
    ):
        self.item_id = item_id
        super().__init__(
            message=message,
            user_message="You need to buy this item before you can wear it.",
            context={"item_id": item_id},
            **kwargs
        )


# ==========================================
# Configuration Errors
# ==========================================

class ConfigurationError(MoodletError):
    """Configuration is invalid or missing"""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        **kwargs
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            user_message="The app is not properly configured.",
            context={"config_key": config_key},
            **kwargs
        )


# ==========================================
# Helper Functions
# ==========================================

def wrap_store_exception(
    error: Exception,
    operation: str,
    profile_id: Optional[str] = None,
    context: Optional[Dict[str, Any]] = None
) -> MoodletError:
    """
    Wrap exceptions raised by a ProfileStore implementation into our hierarchy

    Args:
        error: Original exception
        operation: What operation was being performed
        profile_id: Profile ID if applicable
        context: Additional context

    Returns:
        The error itself if it is already a MoodletError, otherwise a StoreError

    Example:
        try:
            await store.save_profile(profile)
        except Exception as e:
            raise wrap_store_exception(e, operation="save_profile") from e
    """
    if isinstance(error, MoodletError):
        return error

    return StoreError(
        message=f"{operation} failed: {str(error)}",
        profile_id=profile_id,
        operation=operation,
        context=context,
        cause=error
    )
