"""Occurrence snapshots and the cache that publishes them."""

import logging
import threading
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from ..config.models import LimitTier
from ..errors import require
from ..models import MethodRegion, Span
from .thresholds import resolve_tier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Occurrence:
    """A method region bound to the tier its size qualifies for."""

    region: MethodRegion
    tier: LimitTier

    @property
    def span(self) -> Span:
        return self.region.span


@dataclass(frozen=True)
class OccurrenceSet:
    """Immutable result of one analysis pass."""

    occurrences: tuple[Occurrence, ...] = ()
    snapshot_version: int | None = None
    built_at: str = field(default_factory=lambda: datetime.now().isoformat())

    def __len__(self) -> int:
        return len(self.occurrences)

    def __iter__(self):
        return iter(self.occurrences)

    def find_at(self, position: int) -> Occurrence | None:
        """Return the occurrence whose span intersects position, if any."""
        for occurrence in self.occurrences:
            if occurrence.span.intersects_position(position):
                return occurrence
        return None


EMPTY_OCCURRENCES = OccurrenceSet()


def build_occurrences(
    regions: Iterable[MethodRegion],
    tiers: Iterable[LimitTier],
    snapshot_version: int | None = None,
) -> OccurrenceSet:
    """Resolve every region against tiers, keeping those that qualify."""
    tier_list = tuple(require(tiers, "tiers"))
    occurrences = []
    for region in require(regions, "regions"):
        tier = resolve_tier(region.line_count, tier_list)
        if tier is not None:
            occurrences.append(Occurrence(region=region, tier=tier))
    return OccurrenceSet(
        occurrences=tuple(occurrences), snapshot_version=snapshot_version
    )


class OccurrenceCache:
    """Holds the latest OccurrenceSet.

    The analysis pass is the only writer. A rebuild constructs the complete
    new set first and publishes it with a single swap, so readers see either
    the old set or the new one. Concurrent rebuilds are not ordered: the last
    one to publish wins.
    """

    def __init__(self) -> None:
        self._current = EMPTY_OCCURRENCES
        self._lock = threading.Lock()
        self._generation = 0

    @property
    def current(self) -> OccurrenceSet:
        return self._current

    @property
    def generation(self) -> int:
        """Number of sets published so far."""
        return self._generation

    def rebuild(
        self,
        regions: Iterable[MethodRegion],
        tiers: Iterable[LimitTier],
        snapshot_version: int | None = None,
    ) -> OccurrenceSet:
        """Build a new set from regions and publish it.

        If iterating regions raises, nothing is published and the previous
        set stays current.
        """
        new_set = build_occurrences(regions, tiers, snapshot_version)
        with self._lock:
            self._current = new_set
            self._generation += 1
        logger.debug(
            f"Published {len(new_set)} occurrences",
            extra={
                "occurrence_count": len(new_set),
                "snapshot_version": snapshot_version,
            },
        )
        return new_set

    def find_at(self, position: int) -> Occurrence | None:
        """Look up position in the current set."""
        return self._current.find_at(position)
