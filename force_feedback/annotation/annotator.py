"""Paints background overlays behind long methods."""

from ..analysis.occurrences import Occurrence, OccurrenceSet
from ..config.models import AnchorStrategy
from ..errors import require
from ..feedback_logging import LogCategory, get_category_logger
from ..interfaces import CoordinateService, OverlaySurface
from ..models import Found, Span
from .visuals import LONG_METHOD_BORDER, OverlayVisual, Rect

logger = get_category_logger(LogCategory.ANNOTATION)

DEFAULT_FALLBACK_WIDTH = 600.0


class VisualAnnotator:
    """Turns an occurrence set into overlays on the host surface.

    Every repaint is a full repaint. Overlays painted for spans that are no
    longer in the set are removed, and any overlay on the same span is removed
    before the new one is added, so repainting an unchanged set never
    duplicates overlays. Occurrences whose geometry cannot be resolved are
    skipped for this pass and keep the overlay they already have.
    """

    def __init__(
        self,
        coordinates: CoordinateService,
        surface: OverlaySurface,
        anchor_strategy: AnchorStrategy = AnchorStrategy.SINGLE_ANCHOR,
        fallback_width: float = DEFAULT_FALLBACK_WIDTH,
    ):
        self.coordinates = require(coordinates, "coordinates")
        self.surface = require(surface, "surface")
        self.anchor_strategy = anchor_strategy
        self.fallback_width = fallback_width
        self._painted_spans: frozenset[Span] = frozenset()

    def repaint(self, occurrence_set: OccurrenceSet) -> int:
        """Paint every occurrence that has resolvable geometry.

        Returns:
            Number of overlays added.
        """
        require(occurrence_set, "occurrence_set")
        current_spans = frozenset(occurrence.span for occurrence in occurrence_set)
        for span in sorted(self._painted_spans - current_spans, key=lambda s: s.start):
            self.surface.remove_overlays_intersecting(span)

        painted = 0
        painted_spans = set(self._painted_spans & current_spans)
        for occurrence in occurrence_set:
            bounds = self.calculate_bounds(occurrence)
            if bounds is None:
                logger.debug(f"No geometry for {occurrence.region}, skipping overlay")
                continue

            visual = OverlayVisual(
                bounds=bounds,
                fill_color=occurrence.tier.color,
                border=LONG_METHOD_BORDER,
            )
            self.surface.remove_overlays_intersecting(occurrence.span)
            self.surface.add_overlay(occurrence.span, visual)
            painted_spans.add(occurrence.span)
            painted += 1

        self._painted_spans = frozenset(painted_spans)
        return painted

    def calculate_bounds(self, occurrence: Occurrence) -> Rect | None:
        """Compute the overlay rectangle, or None when it cannot be placed."""
        left = self._left_edge(occurrence)
        if left is None:
            return None

        geometry = self.coordinates.marker_geometry(occurrence.span)
        if not isinstance(geometry, Found):
            return None

        bounds = geometry.value
        width = bounds.width if bounds.width > 0 else self.fallback_width
        return Rect(left=left, top=bounds.top, width=width, height=bounds.height)

    def _left_edge(self, occurrence: Occurrence) -> float | None:
        if self.anchor_strategy is AnchorStrategy.CHILD_MINIMUM:
            return self._leftmost_child(occurrence)
        return self._single_anchor(occurrence)

    def _single_anchor(self, occurrence: Occurrence) -> float | None:
        span = occurrence.span
        last_character = max(span.start, span.end - 1)
        for position in (span.start, last_character):
            point = self.coordinates.screen_x_of(position)
            if isinstance(point, Found):
                return point.value.x
        return None

    def _leftmost_child(self, occurrence: Occurrence) -> float | None:
        positions = (*occurrence.region.child_positions, occurrence.span.start)
        xs = [
            point.value.x
            for point in map(self.coordinates.screen_x_of, positions)
            if isinstance(point, Found)
        ]
        if not xs:
            return None
        return min(xs) - self.coordinates.horizontal_scroll_offset()
