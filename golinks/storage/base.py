"""
Base storage interface for the go-link service.

Purpose:
    Define a small, stable contract that the in-memory and PostgreSQL
    backends implement, so the resolver, search and HTTP layers never
    care where links live.

Contract highlights:
    - `create` validates both fields and `update` the fields it is given
      (non-empty, unique name) before anything is persisted.
    - `record_hit` is a separate operation that only bumps `hits` and
      never validates, so a hit succeeds even on a record imported
      out-of-band with otherwise invalid fields.
    - Search goes through two named filters with fixed semantics instead
      of a generic query builder.

Testing & Coverage:
    Abstract methods are annotated with `# pragma: no cover` so coverage
    tools don't penalize un-runnable declarations.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..errors import ValidationError
from ..models import Link

EDITABLE_FIELDS = ("name", "url")


def validate_fields(name: Optional[str], url: Optional[str]) -> None:
    """
    Reject absent or empty name/url values.

    Raises:
        ValidationError: naming every offending field, e.g.
            "name cannot be empty, url cannot be empty".
    """
    problems = []
    if not name:
        problems.append("name cannot be empty")
    if not url:
        problems.append("url cannot be empty")
    if problems:
        raise ValidationError(", ".join(problems))


def check_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Validate the fields of a partial update and return them in column order.

    Only keys present in `fields` are checked and later written; anything
    outside EDITABLE_FIELDS is rejected so `hits`, `id` and `created_at`
    cannot be edited.
    """
    unknown = sorted(set(fields) - set(EDITABLE_FIELDS))
    if unknown:
        raise ValidationError(f"cannot edit field(s): {', '.join(unknown)}")
    problems = [f"{key} cannot be empty" for key in EDITABLE_FIELDS if key in fields and not fields[key]]
    if problems:
        raise ValidationError(", ".join(problems))
    return {key: fields[key] for key in EDITABLE_FIELDS if key in fields}


class BaseStorage(ABC):
    """Abstract base class for link storage backends."""

    def initialize(self) -> None:
        """Prepare the backend (create schema, etc.). No-op by default."""

    @abstractmethod  # pragma: no cover
    def create(self, name: str, url: str) -> Link:
        """
        Persist a new link with hits=0 and created_at=now.

        Raises:
            ValidationError: name or url empty/absent.
            UniquenessError: name already exists.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_by_name(self, name: str) -> Link:
        """Exact, case-sensitive lookup. Raises NotFound."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def find_by_id(self, link_id: int) -> Link:
        """Lookup by primary id. Raises NotFound."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def update(self, link: Link, fields: Dict[str, Any]) -> Link:
        """
        Partially update name and/or url; only the supplied keys are
        validated and written, the rest keep their stored values.

        Raises:
            ValidationError, UniquenessError, NotFound
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def record_hit(self, link: Link) -> Link:
        """
        Atomically increment hits by one, bypassing validation.

        Must not lose updates under concurrent calls. Raises NotFound if
        the record disappeared.
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def delete(self, link: Link) -> None:
        """Remove the link permanently. Raises NotFound if already gone."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def list_all_ordered_by_hits_desc(self) -> List[Link]:
        """All links, most hits first; ties in insertion order."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def filter_by_name_prefix(self, prefix: str) -> List[Link]:
        """Links whose name starts with `prefix`, in insertion order."""
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def filter_by_name_prefix_or_url_substring(self, prefix: str, substring: str) -> List[Link]:
        """Links whose name starts with `prefix` or whose url contains `substring`."""
        raise NotImplementedError
