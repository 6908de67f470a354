"""The friction engine: decides, per edit, whether to corrupt the text stream.

For every text-changed event the engine

1. drops its own synthetic edits and empty events,
2. classifies the first change (keystroke, line break, or ignored),
3. resets cadence on line breaks,
4. locates the occurrence under the insertion point,
5. updates the contiguous-keystroke cadence,
6. emits at most one corrective insertion according to the tier's mode.

Corrective insertions are tagged EditOrigin.SYNTHETIC_FRICTION, so when the
buffer echoes them back they stop at step 1.
"""

import random

from ..analysis.occurrences import Occurrence, OccurrenceCache
from ..config.models import ForcedMarkerMode, RandomCorruptionMode, SilentMode
from ..errors import EditApplicationError, ForceFeedbackError, require
from ..feedback_logging import LogCategory, get_category_logger
from ..interfaces import EditSink
from ..models import EditOrigin, SyntheticEdit, TextChange, TextChangedEvent
from .cadence import CadenceState
from .classifier import CharacterClassifier, EditClass

logger = get_category_logger(LogCategory.FRICTION)

# One generator for the process lifetime, seeded once at import.
SHARED_RANDOM = random.Random()


class FrictionEngine:
    """Injects corrective text into long methods as the user types."""

    def __init__(
        self,
        occurrences: OccurrenceCache,
        sink: EditSink,
        classifier: CharacterClassifier,
        rng: random.Random | None = None,
    ):
        self.occurrences = require(occurrences, "occurrences")
        self.sink = require(sink, "sink")
        self.classifier = require(classifier, "classifier")
        self.rng = rng or SHARED_RANDOM
        self._cadence = CadenceState()

    @property
    def cadence(self) -> CadenceState:
        return self._cadence

    def on_text_changed(self, event: TextChangedEvent) -> SyntheticEdit | None:
        """Handle one committed edit.

        Returns:
            The synthetic edit that was applied, or None.

        Raises:
            EditApplicationError: If the corrective insertion cannot be applied.
        """
        require(event, "event")
        if event.origin is EditOrigin.SYNTHETIC_FRICTION or not event.changes:
            return None

        change = event.changes[0]
        edit_class = self.classifier.classify(change)
        if edit_class is EditClass.IGNORED:
            return None

        if edit_class is EditClass.LINE_BREAK:
            self._cadence.line_break(change.end)
            return None

        occurrence = self.occurrences.find_at(change.start)
        if occurrence is None:
            return None

        cadence = self._cadence.record(change.start, change.end)
        edit = self._decide(occurrence, change, cadence)
        if edit is None:
            return None

        self._apply(edit)
        if isinstance(occurrence.tier.friction, ForcedMarkerMode):
            # Only a marker that landed starts a new run.
            self._cadence.reset()
        logger.debug(
            f"Inserted {edit.text!r} into {occurrence.region}",
            extra={
                "position": edit.position,
                "line_threshold": occurrence.tier.line_threshold,
            },
        )
        return edit

    def _decide(
        self, occurrence: Occurrence, change: TextChange, cadence: int
    ) -> SyntheticEdit | None:
        mode = occurrence.tier.friction
        match mode:
            case SilentMode():
                return None
            case ForcedMarkerMode():
                if cadence < mode.noise_distance:
                    return None
                return SyntheticEdit(position=change.end, text=mode.marker_glyph)
            case RandomCorruptionMode():
                if cadence < mode.noise_distance:
                    return None
                noise = "".join(
                    self.rng.choice(mode.alphabet)
                    for _ in range(mode.count_per_keystroke)
                )
                return SyntheticEdit(position=change.end, text=noise)
        return None

    def _apply(self, edit: SyntheticEdit) -> None:
        """Insert edit through an exclusive, scoped edit session."""
        if not self.sink.can_edit():
            raise EditApplicationError("Cannot edit text buffer", position=edit.position)

        try:
            with self.sink.begin_edit(EditOrigin.SYNTHETIC_FRICTION) as session:
                if not session.insert(edit.position, edit.text):
                    raise EditApplicationError(
                        f"Cannot insert {edit.text!r} into text buffer",
                        position=edit.position,
                    )
                session.apply()
        except ForceFeedbackError:
            raise
        except Exception as e:
            raise EditApplicationError(
                "Applying synthetic edit failed",
                position=edit.position,
                reason=str(e),
            ) from e
