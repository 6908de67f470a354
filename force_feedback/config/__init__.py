"""Configuration package.

Configuration precedence (highest to lowest):
1. Explicit config path
2. FORCE_FEEDBACK_CONFIG environment variable
3. Project config (.force-feedback/config.json)
4. Global config (~/.force-feedback/config.json)
5. Defaults
"""

from .loader import ConfigLoader, load_config
from .models import (
    CHARACTER_PRESETS,
    AnchorStrategy,
    FeedbackConfig,
    ForcedMarkerMode,
    FrictionMode,
    LimitTier,
    RandomCorruptionMode,
    SilentMode,
    get_default_config,
)

__all__ = [
    "CHARACTER_PRESETS",
    "AnchorStrategy",
    "ConfigLoader",
    "FeedbackConfig",
    "ForcedMarkerMode",
    "FrictionMode",
    "LimitTier",
    "RandomCorruptionMode",
    "SilentMode",
    "get_default_config",
    "load_config",
]
