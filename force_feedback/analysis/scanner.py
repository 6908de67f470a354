"""Collect measurable method regions from a snapshot."""

import logging
import re
from collections.abc import Iterator, Sequence

from ..errors import AnalysisError, require
from ..interfaces import SyntaxProvider
from ..models import Declaration, MethodRegion, Span, TextSnapshot

logger = logging.getLogger(__name__)

# C# line terminators only; form feeds and vertical tabs do not end a line.
LINE_TERMINATOR = re.compile(r"\r\n|\r|\n|\u0085|\u2028|\u2029")


def count_body_lines(body_text: str) -> int:
    """Count the lines of a body with leading/trailing blank trivia stripped."""
    trimmed = body_text.strip()
    if not trimmed:
        return 0
    return len(LINE_TERMINATOR.split(trimmed))


class SyntaxScanner:
    """Turns provider declarations into method regions.

    Each call to scan() asks the provider again; nothing is cached between
    passes.
    """

    def __init__(self, provider: SyntaxProvider):
        self.provider = require(provider, "provider")

    async def scan(self, snapshot: TextSnapshot) -> Iterator[MethodRegion]:
        """Request declarations for snapshot and return its regions.

        The returned iterator is single-use. Declarations without a body are
        dropped.

        Raises:
            AnalysisError: If the provider fails or reports spans that do not
                fit the snapshot.
        """
        require(snapshot, "snapshot")
        try:
            declarations = await self.provider.get_declarations(snapshot)
        except AnalysisError:
            raise
        except Exception as e:
            raise AnalysisError(
                "Syntax provider failed",
                snapshot_version=snapshot.version,
                reason=str(e),
            ) from e

        if declarations is None:
            raise AnalysisError(
                "Syntax provider returned no declarations",
                snapshot_version=snapshot.version,
            )

        logger.debug(
            f"Provider returned {len(declarations)} declarations "
            f"for snapshot {snapshot.version}"
        )
        return self._regions(snapshot, declarations)

    def _regions(
        self, snapshot: TextSnapshot, declarations: Sequence[Declaration]
    ) -> Iterator[MethodRegion]:
        for declaration in declarations:
            body_span = declaration.body_span
            if body_span is None:
                continue

            self._check_fits(snapshot, declaration.span)
            self._check_fits(snapshot, body_span)

            yield MethodRegion(
                kind=declaration.kind,
                span=declaration.span,
                body_span=body_span,
                line_count=count_body_lines(snapshot.slice(body_span)),
                child_positions=declaration.child_positions,
                name=declaration.name,
            )

    @staticmethod
    def _check_fits(snapshot: TextSnapshot, span: Span) -> None:
        if span.end > len(snapshot):
            raise AnalysisError(
                "Declaration span exceeds snapshot",
                span=str(span),
                snapshot_length=len(snapshot),
                snapshot_version=snapshot.version,
            )
