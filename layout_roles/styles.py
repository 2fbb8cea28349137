"""Style records: normalized, read-only views of CSS style declarations.

Layout HTML carries styling in two places: an inline ``style`` attribute on
each element and a page-level ``<style>`` block whose rules are keyed by an
element identifier (``#f3 { font-size:8px; }``).  Both are reduced to the same
``StyleRecord`` shape so the classifier can compare ``top``/``left``/
``fontSize`` without caring where a value came from.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

StyleRecord = Mapping[str, str]

EMPTY_STYLE: StyleRecord = MappingProxyType({})

_CAMEL_RE = re.compile(r"[_.-](\w|$)")
_LENGTH_RE = re.compile(r"\s*([+-]?\d+)")
_SHARED_RULE_RE = re.compile(r"^#(f\d+) \{([^}]+)\}$", re.MULTILINE)


class MalformedStyleError(ValueError):
    """A length value is missing or has no leading integer."""


def camel_case(name: str) -> str:
    """``font-size`` -> ``fontSize``; ``_`` and ``.`` separators behave the same."""
    return _CAMEL_RE.sub(lambda m: m.group(1).upper(), name)


def _declarations(text: str) -> Iterable[Tuple[str, str]]:
    parts = (part.partition(":") for part in text.split(";"))
    return ((key.strip(), value.strip()) for key, _, value in parts if key.strip())


def parse_style_declaration(text: str | None) -> StyleRecord:
    """Parse ``"font-size: 8px; top:150px"`` into ``{"fontSize": "8px", "top": "150px"}``."""
    if not text:
        return EMPTY_STYLE
    return MappingProxyType({camel_case(key): value for key, value in _declarations(text)})


def merge_styles(*records: StyleRecord | None) -> StyleRecord:
    """Merge records left to right; later records win on key collision."""
    merged: Dict[str, str] = {}
    for record in records:
        merged.update(record or {})
    return MappingProxyType(merged)


def parse_length(value: str) -> int:
    """Leading integer of a CSS length: ``"12.7px"`` -> 12, ``"-3pt"`` -> -3."""
    match = _LENGTH_RE.match(value)
    if not match:
        raise MalformedStyleError(f"Invalid length value: {value!r}")
    return int(match.group(1))


def style_length(style: StyleRecord, key: str) -> int:
    """Return ``style[key]`` as an integer, failing loudly when absent or malformed."""
    if key not in style:
        raise MalformedStyleError(f"Missing style attribute: {key}")
    return parse_length(style[key])


def shared_style_table(html: str) -> Mapping[str, StyleRecord]:
    """Map each ``#f<n> { ... }`` rule of a page's stylesheet to its record."""
    return MappingProxyType(
        {ident: parse_style_declaration(body) for ident, body in _SHARED_RULE_RE.findall(html)}
    )
