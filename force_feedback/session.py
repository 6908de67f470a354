"""Wiring of the analysis pass and the friction engine for one text view."""

import random
import time

from .analysis.occurrences import OccurrenceCache, OccurrenceSet
from .analysis.scanner import SyntaxScanner
from .annotation.annotator import VisualAnnotator
from .buffer import TextBuffer
from .config.models import FeedbackConfig
from .errors import AnalysisError, require
from .feedback_logging import LogCategory, get_category_logger
from .friction.classifier import CharacterClassifier
from .friction.engine import SHARED_RANDOM, FrictionEngine
from .interfaces import CoordinateService, EditSink, OverlaySurface, SyntaxProvider
from .models import SyntheticEdit, TextChangedEvent, TextSnapshot

logger = get_category_logger(LogCategory.ANALYSIS)


class FeedbackSession:
    """Reacts to layout and text changes of one view.

    Layout changes run an analysis pass: scan, resolve tiers, publish a new
    occurrence set and repaint. Passes are not serialized; when two overlap
    both complete and the last one to finish wins. Text changes run the
    friction engine synchronously against whatever occurrence set is current.

    Example usage:
        session = FeedbackSession(config, provider, buffer, coordinates, surface)
        session.attach(buffer)
        await session.on_layout_changed(buffer.snapshot())
    """

    def __init__(
        self,
        config: FeedbackConfig,
        provider: SyntaxProvider,
        sink: EditSink,
        coordinates: CoordinateService,
        surface: OverlaySurface,
        rng: random.Random | None = None,
    ):
        self.config = require(config, "config")
        self.cache = OccurrenceCache()
        self.scanner = SyntaxScanner(provider)
        self.annotator = VisualAnnotator(
            coordinates,
            surface,
            anchor_strategy=config.anchor_strategy,
            fallback_width=config.fallback_overlay_width,
        )
        if rng is None and config.random_seed is not None:
            rng = random.Random(config.random_seed)
        self.engine = FrictionEngine(
            self.cache,
            sink,
            CharacterClassifier(config.character_set),
            rng=rng or SHARED_RANDOM,
        )

    @property
    def occurrences(self) -> OccurrenceSet:
        return self.cache.current

    def attach(self, buffer: TextBuffer) -> None:
        """Subscribe the friction engine to a buffer's edit stream."""
        require(buffer, "buffer").subscribe(self.on_text_changed)

    def detach(self, buffer: TextBuffer) -> None:
        require(buffer, "buffer").unsubscribe(self.on_text_changed)

    async def on_layout_changed(self, snapshot: TextSnapshot) -> OccurrenceSet | None:
        """Run one analysis pass for snapshot.

        Analysis failures abandon the pass and leave the previous occurrence
        set and overlays in place; the next layout change tries again.

        Returns:
            The published occurrence set, or None if the pass was abandoned.
        """
        require(snapshot, "snapshot")
        start_time = time.perf_counter()
        try:
            regions = await self.scanner.scan(snapshot)
            occurrence_set = self.cache.rebuild(
                regions, self.config.tiers, snapshot_version=snapshot.version
            )
        except AnalysisError as e:
            logger.warning(
                f"Analysis pass abandoned: {e}",
                extra={"snapshot_version": snapshot.version},
            )
            return None

        painted = self.annotator.repaint(occurrence_set)
        logger.debug(
            f"Analysis pass painted {painted}/{len(occurrence_set)} overlays",
            extra={
                "snapshot_version": snapshot.version,
                "occurrence_count": len(occurrence_set),
                "duration_ms": (time.perf_counter() - start_time) * 1000,
            },
        )
        return occurrence_set

    def on_text_changed(self, event: TextChangedEvent) -> SyntheticEdit | None:
        """Run the friction engine for one committed edit."""
        return self.engine.on_text_changed(event)
