"""
Storage module for the go-link service (in-memory implementation).

Responsibilities:
    - Create, read, update and delete links
    - Enforce the non-empty and unique-name constraints
    - Count hits without losing concurrent increments
    - Answer the ordered listing and the two search filters

Design:
    - Reference implementation of the BaseStorage contract, used by default
      and by the test suite.
    - Records are kept in a dict keyed by id; dicts preserve insertion order,
      which doubles as the store's natural order for ties and filters.
    - A single lock guards every read-modify-write, standing in for the
      transactional guarantees of a real database (unique index, atomic
      `UPDATE ... SET hits = hits + 1`).
"""

import itertools
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..errors import NotFound, UniquenessError
from ..models import Link
from .base import BaseStorage, check_fields, validate_fields


class Storage(BaseStorage):
    def __init__(self):
        """
        Initialize empty storage.

        Internal schema:
            self.links = {link_id: Link}
        """
        self.links: Dict[int, Link] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def _name_taken(self, name: str, exclude_id: Optional[int] = None) -> bool:
        return any(l.name == name and l.id != exclude_id for l in self.links.values())

    def create(self, name: str, url: str) -> Link:
        validate_fields(name, url)
        with self._lock:
            if self._name_taken(name):
                raise UniquenessError(f"name {name!r} is already taken")
            link = Link(
                id=next(self._ids),
                name=name,
                url=url,
                hits=0,
                created_at=datetime.now(timezone.utc),
            )
            self.links[link.id] = link
            return link

    def find_by_name(self, name: str) -> Link:
        for link in list(self.links.values()):
            if link.name == name:
                return link
        raise NotFound(f"no link named {name!r}")

    def find_by_id(self, link_id: int) -> Link:
        try:
            return self.links[link_id]
        except KeyError:
            raise NotFound(f"no link with id {link_id}") from None

    def update(self, link: Link, fields: Dict[str, Any]) -> Link:
        changes = check_fields(fields)
        with self._lock:
            current = self.find_by_id(link.id)
            if "name" in changes and self._name_taken(changes["name"], exclude_id=link.id):
                raise UniquenessError(f"name {changes['name']!r} is already taken")
            # unsupplied fields keep their stored values, not the caller's snapshot
            updated = replace(current, **changes)
            self.links[link.id] = updated
            return updated

    def record_hit(self, link: Link) -> Link:
        with self._lock:
            current = self.find_by_id(link.id)
            bumped = replace(current, hits=current.hits + 1)
            self.links[link.id] = bumped
            return bumped

    def delete(self, link: Link) -> None:
        with self._lock:
            if self.links.pop(link.id, None) is None:
                raise NotFound(f"no link with id {link.id}")

    def list_all_ordered_by_hits_desc(self) -> List[Link]:
        # sorted() is stable, so equal hit counts keep insertion order
        return sorted(list(self.links.values()), key=lambda l: l.hits, reverse=True)

    def filter_by_name_prefix(self, prefix: str) -> List[Link]:
        return [l for l in list(self.links.values()) if l.name.startswith(prefix)]

    def filter_by_name_prefix_or_url_substring(self, prefix: str, substring: str) -> List[Link]:
        return [
            l for l in list(self.links.values())
            if l.name.startswith(prefix) or substring in l.url
        ]
