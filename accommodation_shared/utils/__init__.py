"""
Utility modules: exceptions.
"""

from accommodation_shared.utils.exceptions import AppException, OperationFailedError

__all__ = [
    "AppException",
    "OperationFailedError",
]
