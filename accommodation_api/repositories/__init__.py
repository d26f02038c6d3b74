"""
Repository Pattern implementation.

Usage:
    from accommodation_api.repositories import Repository, match_id

    repo = Repository(Airport, db)
    result = await repo.first_or_default(
        match_id(Airport, airport_id).add_include(Airport.city, City.country)
    )
"""

from .specification import (
    Specification,
    ExpressionSpecification,
    AndSpecification,
    OrSpecification,
    NotSpecification,
    match_all,
    match_id,
)
from .repository import Repository, root_cause_message
from .manager import AccommodationRepositoryManager, get_repository_manager

__all__ = [
    # Specification
    "Specification",
    "ExpressionSpecification",
    "AndSpecification",
    "OrSpecification",
    "NotSpecification",
    "match_all",
    "match_id",
    # Repository
    "Repository",
    "root_cause_message",
    # Manager
    "AccommodationRepositoryManager",
    "get_repository_manager",
]
