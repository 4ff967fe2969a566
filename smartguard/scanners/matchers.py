"""Line matchers used by catalog rules.

Every matcher exposes ``matches(line)`` and a ``source`` string, so a rule
can mix plain substring checks and regular expressions freely.
"""

import re
from dataclasses import dataclass, field

from smartguard.models import CatalogConfigurationError


@dataclass(frozen=True)
class RegexMatcher:
    """Case-insensitive regular expression searched anywhere in a line."""

    source: str
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.source:
            raise CatalogConfigurationError("Empty regular expression")
        try:
            compiled = re.compile(self.source, re.IGNORECASE)
        except re.error as exc:
            raise CatalogConfigurationError(
                f"Invalid pattern {self.source!r}: {exc}"
            ) from exc
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, line: str) -> bool:
        return self._compiled.search(line) is not None


@dataclass(frozen=True)
class SubstringMatcher:
    """Case-insensitive literal substring test."""

    source: str

    def __post_init__(self) -> None:
        if not self.source:
            raise CatalogConfigurationError("Empty substring pattern")

    def matches(self, line: str) -> bool:
        return self.source.lower() in line.lower()
