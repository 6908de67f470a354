"""Configuration models for limit tiers and engine settings."""

import string
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Printable symbols that count as typing, besides letters and digits.
EXTENDED_SYMBOLS = " \t\n\r.,;:!?'\"`~@#$%^&*()[]{}<>+-=/\\|_"

CHARACTER_PRESETS = {
    "alphanumeric": string.ascii_letters + string.digits,
    "extended": string.ascii_letters + string.digits + EXTENDED_SYMBOLS,
}


class AnchorStrategy(Enum):
    """How the left edge of a method overlay is located."""

    SINGLE_ANCHOR = "single_anchor"  # First character, falling back to last
    CHILD_MINIMUM = "child_minimum"  # Leftmost of the child positions


class _ConfigModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class SilentMode(_ConfigModel):
    """Display-only tier: the overlay is painted, typing is left alone."""

    kind: Literal["silent"] = "silent"

    @property
    def noise_distance(self) -> int:
        return 1


class ForcedMarkerMode(_ConfigModel):
    """Insert a marker glyph after every noise_distance contiguous keystrokes."""

    kind: Literal["forced_marker"] = "forced_marker"
    noise_distance: int = Field(default=3, ge=1, alias="noiseDistance")
    marker_glyph: str = Field(default="⌫", min_length=1, alias="markerGlyph")


class RandomCorruptionMode(_ConfigModel):
    """Insert randomly drawn characters after every qualifying keystroke."""

    kind: Literal["random_corruption"] = "random_corruption"
    alphabet: tuple[str, ...] = Field(min_length=1, alias="replacementCharacters")
    count_per_keystroke: int = Field(default=1, ge=1, alias="countPerKeystroke")

    @field_validator("alphabet")
    @classmethod
    def _no_empty_entries(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if any(entry == "" for entry in value):
            raise ValueError("replacement characters must not be empty strings")
        return value

    @property
    def noise_distance(self) -> int:
        # Every qualifying keystroke is treated independently.
        return 1


FrictionMode = Annotated[
    SilentMode | ForcedMarkerMode | RandomCorruptionMode,
    Field(discriminator="kind"),
]


class LimitTier(_ConfigModel):
    """A (threshold, color, friction mode) triple."""

    line_threshold: int = Field(ge=0, alias="lineThreshold")
    color: str = Field(min_length=1)
    friction: FrictionMode = Field(default_factory=SilentMode)

    def __str__(self) -> str:
        return f">= {self.line_threshold} lines ({self.friction.kind}, {self.color})"


class FeedbackConfig(_ConfigModel):
    """Fully resolved configuration for one running extension."""

    tiers: tuple[LimitTier, ...] = ()
    interesting_characters: str = Field(
        default="extended", min_length=1, alias="interestingCharacters"
    )
    anchor_strategy: AnchorStrategy = Field(
        default=AnchorStrategy.SINGLE_ANCHOR, alias="anchorStrategy"
    )
    fallback_overlay_width: float = Field(
        default=600.0, gt=0, alias="fallbackOverlayWidth"
    )
    random_seed: int | None = Field(default=None, alias="randomSeed")

    @field_validator("tiers")
    @classmethod
    def _sort_tiers(cls, value: tuple[LimitTier, ...]) -> tuple[LimitTier, ...]:
        return tuple(sorted(value, key=lambda tier: tier.line_threshold))

    @property
    def character_set(self) -> frozenset[str]:
        """Resolve the interesting characters, expanding named presets."""
        characters = CHARACTER_PRESETS.get(
            self.interesting_characters, self.interesting_characters
        )
        return frozenset(characters)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return self.model_dump(mode="json", by_alias=True)


def get_default_config() -> FeedbackConfig:
    """Get the built-in configuration.

    Returns:
        FeedbackConfig with three escalating tiers.
    """
    return FeedbackConfig(
        tiers=(
            LimitTier(line_threshold=10, color="#40F0E68C", friction=SilentMode()),
            LimitTier(
                line_threshold=15,
                color="#40FFA500",
                friction=ForcedMarkerMode(noise_distance=3, marker_glyph="⌫"),
            ),
            LimitTier(
                line_threshold=25,
                color="#40FF0000",
                friction=RandomCorruptionMode(
                    alphabet=("#", "@", "$", "%", "&", "?"), count_per_keystroke=2
                ),
            ),
        ),
    )
