"""
Positional url templates.

A link url may carry `%s` placeholders that are filled, left to right, from
the path segments trailing the link name: with url
`https://github.com/%s/%s`, a visit to `go/gh/psf/requests` lands on
`https://github.com/psf/requests`.

Rules:
    - `%s` is a placeholder; `%%` is a literal percent sign.
    - Any other `%` sequence (percent-encoded bytes such as `%20`) is copied
      through unchanged.
    - Surplus segments are ignored.
    - Too few segments raise TemplateError.
"""

import re
from typing import List, Sequence

from ..errors import TemplateError

_TOKEN = re.compile(r"%[%s]")


def count_placeholders(template: str) -> int:
    """Number of `%s` placeholders in `template` (escaped `%%` excluded)."""
    return sum(1 for m in _TOKEN.finditer(template) if m.group() == "%s")


def substitute(template: str, segments: Sequence[str]) -> str:
    """
    Fill the `%s` placeholders of `template` from `segments`, in order.

    Raises:
        TemplateError: if `template` has more placeholders than `segments`.
    """
    needed = count_placeholders(template)
    if needed > len(segments):
        raise TemplateError(
            f"url template expects {needed} path segment(s), got {len(segments)}"
        )
    values = iter(segments)
    return _TOKEN.sub(lambda m: "%" if m.group() == "%%" else next(values), template)


def split_path(path: str) -> List[str]:
    """
    Split a trailing request path into segments.

    Trailing empty pieces are dropped, so "" and "/" yield [] rather than
    [""], while inner empty pieces survive: "a//b" -> ["a", "", "b"].
    """
    parts = (path or "").split("/")
    while parts and parts[-1] == "":
        parts.pop()
    return parts
