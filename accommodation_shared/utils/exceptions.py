"""
Application exceptions with automatic logging.

Services report expected failures through result wrappers, not exceptions.
These classes exist for callers that want to turn a failed result into an
exception at their own boundary (see ``Result.raise_for_failure``).

Usage:
    from accommodation_shared.utils.exceptions import OperationFailedError

    result = await service.get_by_id(airport_id)
    dto = result.unwrap()  # raises OperationFailedError on failure
"""

from typing import Any, Sequence

from accommodation_shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(Exception):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging.
    """

    def __init__(
        self,
        detail: str,
        log_level: str = "warning",
        **log_context: Any,
    ):
        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, **log_context)

        super().__init__(detail)
        self.detail = detail
        self.log_context = log_context


class OperationFailedError(AppException):
    """
    A service or repository operation returned a failed result.

    Usage:
        raise OperationFailedError(["No Gift with id matching 'g1' was found in the database"])
    """

    def __init__(self, messages: Sequence[str], **log_context: Any):
        self.messages = list(messages)
        detail = "; ".join(self.messages) if self.messages else "Operation failed"
        super().__init__(detail, log_level="warning", messages=self.messages, **log_context)
