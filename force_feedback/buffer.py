"""In-memory text buffer implementing the edit stream and the edit sink.

Hosts that do not bring their own buffer (tests, headless tooling) can use
TextBuffer directly: it serializes edits behind an exclusive gate and
notifies subscribers synchronously once the gate has been released. Edits a
subscriber makes while handling a notification are delivered before the
remaining subscribers see the original edit.
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager

from .errors import EditApplicationError, require
from .feedback_logging import LogCategory, get_category_logger
from .models import EditOrigin, TextChange, TextChangedEvent, TextSnapshot

logger = get_category_logger(LogCategory.HOST)

ChangeListener = Callable[[TextChangedEvent], object]


class BufferEditSession:
    """Insertions queued against one buffer version."""

    def __init__(self, buffer: "TextBuffer", origin: EditOrigin):
        self._buffer = buffer
        self.origin = origin
        self._inserts: list[tuple[int, str]] = []
        self.event: TextChangedEvent | None = None

    def insert(self, position: int, text: str) -> bool:
        """Queue an insertion; False if position lies outside the buffer."""
        if self.event is not None or not 0 <= position <= len(self._buffer.text):
            return False
        self._inserts.append((position, text))
        return True

    def apply(self) -> None:
        """Commit queued insertions. Positions refer to the pre-edit text."""
        if self.event is not None:
            raise RuntimeError("Edit session already applied")

        changes = []
        shift = 0
        text = self._buffer.text
        for position, inserted in sorted(self._inserts, key=lambda item: item[0]):
            actual = position + shift
            text = text[:actual] + inserted + text[actual:]
            changes.append(TextChange(start=actual, inserted_text=inserted))
            shift += len(inserted)

        self.event = self._buffer._commit(text, self.origin, tuple(changes))


class TextBuffer:
    """A mutable text buffer with an exclusive edit gate."""

    def __init__(self, text: str = "", read_only: bool = False):
        self._text = text
        self._version = 0
        self._listeners: list[ChangeListener] = []
        self._gate_held = False
        self.read_only = read_only

    @property
    def text(self) -> str:
        return self._text

    @property
    def version(self) -> int:
        return self._version

    def snapshot(self) -> TextSnapshot:
        return TextSnapshot(text=self._text, version=self._version)

    def subscribe(self, listener: ChangeListener) -> None:
        self._listeners.append(require(listener, "listener"))

    def unsubscribe(self, listener: ChangeListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def can_edit(self) -> bool:
        """Whether the edit gate can be acquired right now."""
        return not self.read_only and not self._gate_held

    @contextmanager
    def begin_edit(
        self, origin: EditOrigin
    ) -> Generator[BufferEditSession, None, None]:
        """Hold the edit gate for the duration of the context.

        Subscribers are notified after the gate is released, and only if the
        session was applied without error.

        Raises:
            EditApplicationError: If the gate cannot be acquired.
        """
        require(origin, "origin")
        if not self.can_edit():
            raise EditApplicationError(
                "Cannot edit text buffer",
                read_only=self.read_only,
                edit_in_progress=self._gate_held,
            )

        self._gate_held = True
        session = BufferEditSession(self, origin)
        try:
            yield session
        finally:
            self._gate_held = False

        if session.event is not None:
            self._notify(session.event)

    def insert(
        self, position: int, text: str, origin: EditOrigin = EditOrigin.USER
    ) -> TextChangedEvent:
        """Insert text as a single edit, typically on behalf of the user."""
        with self.begin_edit(origin) as session:
            if not session.insert(position, text):
                raise EditApplicationError(
                    "Insertion outside buffer", position=position, length=len(self._text)
                )
            session.apply()
        return session.event

    def type_text(self, position: int, text: str) -> int:
        """Type text one character at a time, returning the caret position.

        Text that subscribers insert at the caret while handling a keystroke
        ends up before the caret, the way an editor caret tracks insertions
        made at its position.
        """
        caret = position
        for character in text:
            length_before = len(self._text)
            self.insert(caret, character)
            caret += len(self._text) - length_before
        return caret

    def delete(
        self, start: int, length: int, origin: EditOrigin = EditOrigin.USER
    ) -> TextChangedEvent:
        """Remove length characters at start as a single edit."""
        if start < 0 or length < 0 or start + length > len(self._text):
            raise EditApplicationError(
                "Deletion outside buffer", start=start, length=length
            )
        with self.begin_edit(origin):
            event = self._commit(
                self._text[:start] + self._text[start + length :],
                origin,
                (TextChange(start=start, inserted_text="", removed_length=length),),
            )
        self._notify(event)
        return event

    def _commit(
        self, text: str, origin: EditOrigin, changes: tuple[TextChange, ...]
    ) -> TextChangedEvent:
        self._text = text
        self._version += 1
        return TextChangedEvent(
            origin=origin, changes=changes, snapshot_version=self._version
        )

    def _notify(self, event: TextChangedEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
