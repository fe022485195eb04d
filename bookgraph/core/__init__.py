"""
Core domain logic: validation, integrity checks, batching and resolution.
"""

from bookgraph.core.exceptions import (
    BookGraphException,
    DependencyConflict,
    DuplicateKey,
    NotFound,
    ReferenceNotFound,
    ValidationError,
)

__all__ = [
    "BookGraphException",
    "DependencyConflict",
    "DuplicateKey",
    "NotFound",
    "ReferenceNotFound",
    "ValidationError",
]
