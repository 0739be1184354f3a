"""
Selector data model - ordered candidate lists and probe results.

Lightning renders the same logical element with different markup depending
on release, record type and layout. A page object therefore names each
element with an ordered list of candidate selectors, most reliable first.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ProbeResult(Enum):
    """Outcome of a single visibility probe."""
    VISIBLE = "visible"
    NOT_VISIBLE = "not_visible"
    PROBE_ERROR = "probe_error"


@dataclass(frozen=True)
class ProbeOutcome:
    """One probed selector and what came of it."""
    selector: str
    result: ProbeResult
    error: Optional[str] = None


@dataclass(frozen=True)
class RoleQuery:
    """
    Accessibility-role lookup used as a last resort.

    Attributes:
        role: ARIA role (button, option, heading, ...)
        name_pattern: Regex matched case-insensitively against the accessible name
    """
    role: str
    name_pattern: str

    def describe(self) -> str:
        return f"role={self.role}[name=/{self.name_pattern}/i]"


@dataclass(frozen=True)
class InteractionTarget:
    """
    Ordered, non-empty sequence of selectors for one logical element.

    Order is significant: the first visible candidate wins. The optional
    role fallback is only consulted after every candidate has been probed.

    Attributes:
        candidates: Selector patterns, most specific first
        fallback: Optional role-based lookup tried last
        label: Human-readable name used in logs and errors
    """
    candidates: Tuple[str, ...]
    fallback: Optional[RoleQuery] = None
    label: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.candidates, str):
            raise TypeError("candidates must be a sequence of selectors, not a string")
        candidates = tuple(c.strip() for c in self.candidates)
        if not candidates or not all(candidates):
            raise ValueError("InteractionTarget needs at least one non-empty selector")
        object.__setattr__(self, "candidates", candidates)

    @classmethod
    def of(cls, *candidates: str, fallback: Optional[RoleQuery] = None, label: str = "") -> "InteractionTarget":
        """Build a target from positional selectors."""
        return cls(candidates=tuple(candidates), fallback=fallback, label=label)

    @classmethod
    def parse(cls, delimited: str, fallback: Optional[RoleQuery] = None, label: str = "") -> "InteractionTarget":
        """
        Build a target from the comma-delimited catalog form.

        Only top-level commas split; commas inside quotes, brackets or
        parentheses belong to the selector.

        Example:
            >>> InteractionTarget.parse("a[title='New'], button[name='New']").candidates
            ("a[title='New']", "button[name='New']")
        """
        parts = []
        depth = 0
        quote = ""
        current = []
        for ch in delimited:
            if quote:
                if ch == quote:
                    quote = ""
            elif ch in "'\"":
                quote = ch
            elif ch in "([":
                depth += 1
            elif ch in ")]":
                depth -= 1
            elif ch == "," and depth == 0:
                parts.append("".join(current))
                current = []
                continue
            current.append(ch)
        parts.append("".join(current))
        return cls(candidates=tuple(p.strip() for p in parts if p.strip()), fallback=fallback, label=label)

    def with_fallback(self, fallback: RoleQuery) -> "InteractionTarget":
        """Return a copy that uses ``fallback`` as the role-based last resort."""
        return InteractionTarget(candidates=self.candidates, fallback=fallback, label=self.label)

    def describe(self) -> str:
        return self.label or self.candidates[0]

    def all_patterns(self) -> Tuple[str, ...]:
        """Every pattern that may be probed, in order, fallback included."""
        if self.fallback:
            return self.candidates + (self.fallback.describe(),)
        return self.candidates
