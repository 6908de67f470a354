"""Classification of inserted text as typing, line break, or noise."""

from collections.abc import Iterable
from enum import Enum

from ..errors import require
from ..models import TextChange


class EditClass(Enum):
    """What an inserted text means to the friction engine."""

    IGNORED = "ignored"  # Paste, deletion, or characters outside the set
    LINE_BREAK = "line_break"  # Resets cadence, never triggers friction
    KEYSTROKE = "keystroke"  # A qualifying typed character


class CharacterClassifier:
    """Decides whether an insertion counts as a qualifying keystroke.

    A one-character insertion is tested literally. Longer insertions are
    tested after trimming surrounding spaces and tabs, so that auto-indent
    inserted next to a typed character or line break is classified by the
    character itself. Line breaks are recognised whatever the character set.
    """

    TRIM = " \t"

    def __init__(self, characters: Iterable[str]):
        self.characters = frozenset(require(characters, "characters"))

    def classify(self, change: TextChange) -> EditClass:
        require(change, "change")
        if change.is_line_break:
            return EditClass.LINE_BREAK

        text = change.inserted_text
        candidate = text if len(text) == 1 else text.strip(self.TRIM)
        if len(candidate) == 1 and candidate in self.characters:
            return EditClass.KEYSTROKE
        return EditClass.IGNORED
