"""
Resolver module for the go-link service.

Responsibilities:
    - Turn a requested short name plus trailing path segments into a
      redirect target
    - Record a hit for every resolution of an existing link
    - Fill url templates positionally from the path segments

Design notes:
    - Missing names are a normal outcome (`Unresolved`), not an error: the
      HTTP layer answers with an offer to create the link.
    - The hit is recorded before substitution, so a visit counts even when
      the template then rejects the supplied segments.
    - No name normalization: lookups are exact.
"""

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from ..errors import NotFound
from ..storage.base import BaseStorage
from .template import substitute

log = logging.getLogger("golinks.resolver")


@dataclass(frozen=True)
class RedirectTarget:
    """Where the visitor should be sent."""
    url: str


@dataclass(frozen=True)
class Unresolved:
    """No link carries the requested name."""
    name: str


Resolution = Union[RedirectTarget, Unresolved]


class Resolver:
    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def resolve(self, name: str, path_segments: Sequence[str] = ()) -> Resolution:
        """
        Resolve `name` and count the visit.

        Args:
            name (str): Short name, matched exactly.
            path_segments (Sequence[str]): Values for the url's `%s`
                placeholders; when empty the url is returned verbatim.

        Returns:
            RedirectTarget or Unresolved.

        Raises:
            TemplateError: the url needs more segments than were supplied
                (the hit has already been recorded).
        """
        try:
            link = self.storage.find_by_name(name)
        except NotFound:
            log.info("Unresolved go-link %r", name)
            return Unresolved(name)

        try:
            self.storage.record_hit(link)
        except NotFound:
            # deleted between the lookup and the hit
            log.info("Go-link %r vanished before its hit was recorded", name)
            return Unresolved(name)

        if not path_segments:
            return RedirectTarget(link.url)
        return RedirectTarget(substitute(link.url, list(path_segments)))
