"""Tier selection for a measured line count."""

from collections.abc import Iterable

from ..config.models import LimitTier
from ..errors import require


def resolve_tier(line_count: int, tiers: Iterable[LimitTier]) -> LimitTier | None:
    """Select the tier a body of line_count lines falls into.

    Tiers are ordered ascending by threshold; the last tier whose threshold
    does not exceed line_count wins. The lower bound is inclusive.

    Args:
        line_count: Trimmed body line count.
        tiers: Configured tiers in any order.

    Returns:
        The matching tier, or None when line_count is below every threshold.
    """
    require(line_count, "line_count")
    require(tiers, "tiers")

    selected: LimitTier | None = None
    for tier in sorted(tiers, key=lambda t: t.line_threshold):
        if line_count < tier.line_threshold:
            break
        selected = tier
    return selected
