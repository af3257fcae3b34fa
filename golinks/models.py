"""
Domain model for the go-link service.

A `Link` is the sole persistent entity: a unique short `name` mapped to a
destination `url` (optionally a `%s` template), with a usage counter.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Link:
    """Immutable snapshot of a stored link; stores hand out fresh copies."""
    id: int
    name: str
    url: str
    hits: int = 0
    created_at: datetime = field(default_factory=_utcnow)
