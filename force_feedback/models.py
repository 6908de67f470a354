"""Core data model for force-feedback.

This module defines the value types shared by the analysis, friction and
annotation paths: spans and snapshots, declarations reported by a syntax
provider, method regions, text edits, and lookup results returned by the
host's coordinate services.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")

LINE_BREAKS = ("\r\n", "\n", "\r")


@dataclass(frozen=True)
class Span:
    """Half-open character range [start, end) in a snapshot."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, position: int) -> bool:
        """Check whether position lies inside the half-open range."""
        return self.start <= position < self.end

    def intersects_position(self, position: int) -> bool:
        """Check whether position touches the span, both ends inclusive.

        An insertion at the very end of a span is still considered to
        intersect it.
        """
        return self.start <= position <= self.end

    def overlaps(self, other: "Span") -> bool:
        """Check whether two spans share at least one character."""
        return self.start < other.end and other.start < self.end

    def __str__(self) -> str:
        return f"[{self.start}..{self.end})"


@dataclass(frozen=True)
class TextSnapshot:
    """Immutable view of the buffer text at one version."""

    text: str
    version: int = 0

    def __len__(self) -> int:
        return len(self.text)

    def slice(self, span: Span) -> str:
        return self.text[span.start : span.end]


class DeclarationKind(Enum):
    """Declarations whose bodies are measured."""

    METHOD = "method"
    CONSTRUCTOR = "constructor"


@dataclass(frozen=True)
class Declaration:
    """A declaration node as reported by a syntax provider.

    body_span is None for members without a block body (abstract,
    extern, interface or expression-bodied members).
    """

    kind: DeclarationKind
    span: Span
    body_span: Span | None = None
    child_positions: tuple[int, ...] = ()
    name: str | None = None


@dataclass(frozen=True)
class MethodRegion:
    """A method or constructor body measured in one snapshot.

    Regions carry no identity across snapshots; they are recomputed on
    every scan.
    """

    kind: DeclarationKind
    span: Span
    body_span: Span
    line_count: int
    child_positions: tuple[int, ...] = ()
    name: str | None = None

    def __str__(self) -> str:
        label = self.name or self.kind.value
        return f"{label} {self.span} ({self.line_count} lines)"


class EditOrigin(Enum):
    """Who produced an edit."""

    USER = "user"
    SYNTHETIC_FRICTION = "synthetic_friction"


@dataclass(frozen=True)
class TextChange:
    """A single insertion (optionally replacing removed text) in the buffer."""

    start: int
    inserted_text: str
    removed_length: int = 0

    @property
    def end(self) -> int:
        """Position just after the inserted text."""
        return self.start + len(self.inserted_text)

    @property
    def is_line_break(self) -> bool:
        """Whether the insertion is a line break, ignoring auto-indentation."""
        return self.inserted_text.strip(" \t") in LINE_BREAKS


@dataclass(frozen=True)
class TextChangedEvent:
    """One committed buffer mutation, delivered in commit order."""

    origin: EditOrigin
    changes: tuple[TextChange, ...] = ()
    snapshot_version: int = 0

    @property
    def is_synthetic(self) -> bool:
        return self.origin is EditOrigin.SYNTHETIC_FRICTION


@dataclass(frozen=True)
class SyntheticEdit:
    """A corrective insertion emitted by the friction engine."""

    position: int
    text: str
    origin: EditOrigin = field(default=EditOrigin.SYNTHETIC_FRICTION)


@dataclass(frozen=True)
class Point:
    """Screen coordinates."""

    x: float
    y: float = 0.0


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned screen bounds."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class Found(Generic[T]):
    """A lookup that produced a value."""

    value: T


class Unavailable:
    """A lookup that produced no value (e.g. position scrolled out of view)."""

    _instance: "Unavailable | None" = None

    def __new__(cls) -> "Unavailable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable()

Lookup = Found[T] | Unavailable
