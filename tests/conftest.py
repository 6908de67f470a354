"""
Shared fixtures for the force-feedback test suite.

Provides:
- C#-like source builders with declaration spans
- A scripted syntax provider
- Fake coordinate service and overlay surface
- Buffer and session factories
"""

import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import pytest

from force_feedback.annotation.visuals import OverlayVisual
from force_feedback.buffer import TextBuffer
from force_feedback.config.models import (
    FeedbackConfig,
    ForcedMarkerMode,
    LimitTier,
    RandomCorruptionMode,
)
from force_feedback.models import (
    UNAVAILABLE,
    Bounds,
    Declaration,
    DeclarationKind,
    Found,
    Point,
    Span,
    TextSnapshot,
)
from force_feedback.session import FeedbackSession

# ---------------------------------------------------------------------------
# Source builders
# ---------------------------------------------------------------------------


def method_source(name: str, body_lines: int, indent: str = "    ") -> str:
    """Build a method whose braced body spans exactly body_lines lines.

    A body of N lines has an opening brace line, N - 2 statement lines and a
    closing brace line.
    """
    assert body_lines >= 2
    statements = "".join(
        f"{indent}    var v{i} = {i};\n" for i in range(body_lines - 2)
    )
    return f"{indent}public void {name}()\n{indent}{{\n{statements}{indent}}}\n"


def braced_declaration(
    text: str,
    header: str,
    kind: DeclarationKind = DeclarationKind.METHOD,
) -> Declaration:
    """Locate header in text and return a declaration for its braced body."""
    start = text.index(header)
    open_brace = text.index("{", start)
    depth = 0
    for position in range(open_brace, len(text)):
        if text[position] == "{":
            depth += 1
        elif text[position] == "}":
            depth -= 1
            if depth == 0:
                end = position + 1
                break
    else:
        raise ValueError(f"Unbalanced braces after {header!r}")

    return Declaration(
        kind=kind,
        span=Span(start, end),
        body_span=Span(open_brace, end),
        child_positions=(start, open_brace),
        name=header,
    )


def expression_declaration(text: str, header: str) -> Declaration:
    """Return a bodiless declaration for an expression-bodied member."""
    start = text.index(header)
    end = text.index(";", start) + 1
    return Declaration(
        kind=DeclarationKind.METHOD,
        span=Span(start, end),
        body_span=None,
        child_positions=(start,),
        name=header,
    )


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class ScriptedSyntaxProvider:
    """Returns declarations computed by a callback, or raises an error."""

    def __init__(
        self,
        declarations: Callable[[TextSnapshot], Sequence[Declaration]] | None = None,
        error: Exception | None = None,
    ):
        self.declarations = declarations or (lambda snapshot: [])
        self.error = error
        self.calls: list[int] = []

    async def get_declarations(self, snapshot: TextSnapshot) -> Sequence[Declaration]:
        self.calls.append(snapshot.version)
        if self.error is not None:
            raise self.error
        return self.declarations(snapshot)


@dataclass
class FakeCoordinateService:
    """Screen geometry where x equals 10 * column and lines are 20 high."""

    text: Callable[[], str]
    unavailable_positions: set[int] = field(default_factory=set)
    geometry_unavailable: bool = False
    measured_width: float = 480.0
    scroll_offset: float = 0.0
    x_lookups: list[int] = field(default_factory=list)

    def _line_and_column(self, position: int) -> tuple[int, int]:
        before = self.text()[:position]
        line = before.count("\n")
        column = position - (before.rfind("\n") + 1)
        return line, column

    def screen_x_of(self, position: int):
        self.x_lookups.append(position)
        if position in self.unavailable_positions:
            return UNAVAILABLE
        _, column = self._line_and_column(position)
        return Found(Point(x=10.0 * column, y=0.0))

    def marker_geometry(self, span: Span):
        if self.geometry_unavailable:
            return UNAVAILABLE
        first_line, _ = self._line_and_column(span.start)
        last_line, _ = self._line_and_column(span.end)
        return Found(
            Bounds(
                left=0.0,
                top=20.0 * first_line,
                right=self.measured_width,
                bottom=20.0 * (last_line + 1),
            )
        )

    def horizontal_scroll_offset(self) -> float:
        return self.scroll_offset


class RecordingOverlaySurface:
    """Keeps overlays in insertion order, keyed by span."""

    def __init__(self) -> None:
        self.overlays: list[tuple[Span, OverlayVisual]] = []
        self.removals: list[Span] = []

    def remove_overlays_intersecting(self, span: Span) -> None:
        self.removals.append(span)
        self.overlays = [
            (existing, visual)
            for existing, visual in self.overlays
            if not existing.overlaps(span)
        ]

    def add_overlay(self, span: Span, visual: OverlayVisual) -> None:
        self.overlays.append((span, visual))

    def __len__(self) -> int:
        return len(self.overlays)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def forced_marker_config() -> FeedbackConfig:
    """Scenario A configuration: marker after three contiguous keystrokes."""
    return FeedbackConfig(
        tiers=(
            LimitTier(
                line_threshold=5,
                color="#40FFA500",
                friction=ForcedMarkerMode(noise_distance=3, marker_glyph="⌫"),
            ),
        )
    )


@pytest.fixture()
def random_corruption_config() -> FeedbackConfig:
    """Scenario B configuration: two of x/y after every keystroke."""
    return FeedbackConfig(
        tiers=(
            LimitTier(
                line_threshold=3,
                color="#40FF0000",
                friction=RandomCorruptionMode(alphabet=("x", "y"), count_per_keystroke=2),
            ),
        )
    )


@pytest.fixture()
def surface() -> RecordingOverlaySurface:
    return RecordingOverlaySurface()


@pytest.fixture()
def session_factory(surface):
    """Build a buffer-backed session over text with scripted declarations."""

    def build(
        config: FeedbackConfig,
        text: str,
        headers: Sequence[str] = (),
        provider: ScriptedSyntaxProvider | None = None,
        seed: int = 1234,
    ) -> tuple[FeedbackSession, TextBuffer, ScriptedSyntaxProvider]:
        buffer = TextBuffer(text)
        if provider is None:
            provider = ScriptedSyntaxProvider(
                lambda snapshot: [
                    braced_declaration(snapshot.text, header) for header in headers
                ]
            )
        coordinates = FakeCoordinateService(text=lambda: buffer.text)
        session = FeedbackSession(
            config,
            provider,
            buffer,
            coordinates,
            surface,
            rng=random.Random(seed),
        )
        session.attach(buffer)
        return session, buffer, provider

    return build
