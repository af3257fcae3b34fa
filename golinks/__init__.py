"""
golinks package initializer.

Re-exports the pieces callers wire together: the store factory, the
resolver and search services, the `Link` record and the error types.
"""

from .errors import GoLinkError, NotFound, StoreUnavailable, TemplateError, UniquenessError, ValidationError
from .models import Link
from .resolver.resolver import RedirectTarget, Resolver, Unresolved
from .search.search import LinkSearch
from .storage.storage_factory import get_storage

__all__ = [
    "GoLinkError",
    "Link",
    "LinkSearch",
    "NotFound",
    "RedirectTarget",
    "Resolver",
    "StoreUnavailable",
    "TemplateError",
    "UniquenessError",
    "Unresolved",
    "ValidationError",
    "get_storage",
]
