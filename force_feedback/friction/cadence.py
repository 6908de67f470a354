"""Typing cadence tracking."""

from dataclasses import dataclass


@dataclass
class CadenceState:
    """Contiguous keystroke counter for one edit stream."""

    last_edit_end: int | None = None
    consecutive_keystrokes: int = 0

    def record(self, start: int, end: int) -> int:
        """Count a keystroke spanning [start, end) and return the new cadence."""
        if self.last_edit_end is not None and start == self.last_edit_end:
            self.consecutive_keystrokes += 1
        else:
            self.consecutive_keystrokes = 1
        self.last_edit_end = end
        return self.consecutive_keystrokes

    def line_break(self, end: int) -> None:
        """Reset after a line break ending at end."""
        self.consecutive_keystrokes = 0
        self.last_edit_end = end

    def reset(self) -> None:
        self.consecutive_keystrokes = 0
