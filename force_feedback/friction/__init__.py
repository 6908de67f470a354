"""Friction: edit classification, cadence tracking and corrective insertions."""

from .cadence import CadenceState
from .classifier import CharacterClassifier, EditClass
from .engine import SHARED_RANDOM, FrictionEngine

__all__ = [
    "SHARED_RANDOM",
    "CadenceState",
    "CharacterClassifier",
    "EditClass",
    "FrictionEngine",
]
