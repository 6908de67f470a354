"""force-feedback: make overly long methods hard to keep typing in.

The package tracks method and constructor bodies that exceed configured line
thresholds, paints a background behind them, and interferes with typing
inside them by inserting marker glyphs or random characters.
"""

__version__ = "0.1.0"

from .analysis import OccurrenceCache, OccurrenceSet, SyntaxScanner, resolve_tier
from .annotation import VisualAnnotator
from .buffer import TextBuffer
from .config import FeedbackConfig, LimitTier, load_config
from .errors import (
    AnalysisError,
    ConfigurationError,
    EditApplicationError,
    ForceFeedbackError,
    InvalidInputError,
)
from .friction import FrictionEngine
from .models import EditOrigin, TextChange, TextChangedEvent, TextSnapshot
from .session import FeedbackSession

__all__ = [
    "AnalysisError",
    "ConfigurationError",
    "EditApplicationError",
    "EditOrigin",
    "FeedbackConfig",
    "FeedbackSession",
    "ForceFeedbackError",
    "FrictionEngine",
    "InvalidInputError",
    "LimitTier",
    "OccurrenceCache",
    "OccurrenceSet",
    "SyntaxScanner",
    "TextBuffer",
    "TextChange",
    "TextChangedEvent",
    "TextSnapshot",
    "VisualAnnotator",
    "__version__",
    "load_config",
    "resolve_tier",
]
