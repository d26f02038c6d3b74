"""
Shared infrastructure for the accommodation backend.

Subpackages:
- config: settings, structured logging, constants
- infrastructure: async database engine and sessions
- utils: application exceptions

Modules:
- results: Result / DataResult wrappers returned by repositories and services
"""

from accommodation_shared.results import Result, DataResult

__all__ = [
    "Result",
    "DataResult",
]
