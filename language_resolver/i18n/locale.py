"""
Locale helpers

Accept-Language handling for language resolution:
- quality-weighted parsing of the header (q= values)
- two strategies for extracting the primary language code, selected once
  at startup through :func:`select_matcher`
"""

from __future__ import annotations

import math
import re
from typing import Protocol, runtime_checkable

# ── Constants ─────────────────────────────────────────────────────────────────

WEIGHTED = "weighted"
PREFIX = "prefix"

_PRIMARY_PREFIX_RE = re.compile(r"^[a-z]{2}")
_LANGUAGE_TAG_RE = re.compile(r"^[A-Za-z]{1,8}(?:-[A-Za-z0-9]{1,8})*$")


# ── Parsing ───────────────────────────────────────────────────────────────────


def parse_accept_language(header: str) -> list[tuple[float, str]]:
    """Parse an Accept-Language header into (quality, tag) pairs.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Drop entries with an unparsable or out-of-range q-value (only 0 < q <= 1
       is acceptable) or a malformed tag.
    3. Sort by q-value descending, keeping header order for equal weights.

    Args:
        header: Value of the Accept-Language HTTP header, e.g.
                "fr-CA,fr;q=0.9,en-US;q=0.8,en;q=0.7".

    Returns:
        List of (quality, tag) tuples, best first. Empty for a blank header.
    """
    if not header:
        return []

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        tag, *params = (piece.strip() for piece in part.split(";"))
        q = 1.0
        valid = True
        for param in params:
            name, _, value = param.partition("=")
            if name.strip().lower() != "q":
                continue
            try:
                q = float(value.strip())
            except ValueError:
                valid = False
        if not valid or not math.isfinite(q) or not 0 < q <= 1:
            continue
        if tag != "*" and not _LANGUAGE_TAG_RE.match(tag):
            continue
        weighted.append((q, tag))

    # Stable sort keeps original order at equal q
    weighted.sort(key=lambda x: x[0], reverse=True)
    return weighted


def primary_subtag(tag: str) -> str:
    """Return the lower-cased primary subtag: "en-US" → "en"."""
    return tag.replace("_", "-").split("-")[0].lower()


# ── Matcher strategies ────────────────────────────────────────────────────────


@runtime_checkable
class PrimaryLanguageMatcher(Protocol):
    """Extracts the primary language code from an Accept-Language value."""

    name: str

    def primary_language(self, header: str) -> str | None: ...


class WeightedLanguageMatcher:
    """Picks the highest-weighted language tag and returns its primary subtag."""

    name = WEIGHTED

    def primary_language(self, header: str) -> str | None:
        for _, tag in parse_accept_language(header):
            if tag == "*":
                continue
            return primary_subtag(tag)
        return None


class PrefixLanguageMatcher:
    """Returns the leading two-letter lowercase prefix of the raw header."""

    name = PREFIX

    def primary_language(self, header: str) -> str | None:
        if not header:
            return None
        match = _PRIMARY_PREFIX_RE.match(header)
        return match.group(0) if match else None


_MATCHERS: dict[str, type] = {
    WEIGHTED: WeightedLanguageMatcher,
    PREFIX: PrefixLanguageMatcher,
}


def select_matcher(strategy: str = WEIGHTED) -> PrimaryLanguageMatcher:
    """Return the matcher registered under ``strategy``.

    Raises:
        ValueError: for an unknown strategy name.
    """
    try:
        return _MATCHERS[strategy.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown Accept-Language matcher '{strategy}', expected one of: {', '.join(sorted(_MATCHERS))}"
        ) from None
