"""
Search & suggestion for the go-link service.

Two read-only query shapes, both plain case-sensitive prefix/substring
matches delivered in the store's natural order:

    suggest(q)        -> [q, [names]]  name starts with q OR url contains q
    search_or_list(q) -> RedirectTarget when a name equals q exactly,
                         otherwise the links whose name starts with q

Neither records hits.
"""

from typing import List, Optional, Union
from urllib.parse import quote

from ..errors import NotFound
from ..models import Link
from ..resolver.resolver import RedirectTarget
from ..storage.base import BaseStorage


def link_path(name: str) -> str:
    """Canonical in-app path of a link, e.g. "/docs"."""
    return "/" + quote(name, safe="")


class LinkSearch:
    def __init__(self, storage: BaseStorage):
        self.storage = storage

    def suggest(self, query: Optional[str]) -> list:
        """
        Typeahead candidates in the OpenSearch suggestions shape.

        Returns:
            list: `[query, [name, ...]]`, echoing the query so a client can
                correlate the response with its request.
        """
        query = query or ""
        matches = self.storage.filter_by_name_prefix_or_url_substring(query, query)
        return [query, [link.name for link in matches]]

    def search_or_list(self, query: Optional[str]) -> Union[RedirectTarget, List[Link]]:
        """Exact name match short-circuits to that link; otherwise list by name prefix."""
        query = query or ""
        try:
            link = self.storage.find_by_name(query)
        except NotFound:
            return self.storage.filter_by_name_prefix(query)
        return RedirectTarget(link_path(link.name))
