"""
Card Effects - From human-authored card text to executable actions.

- catalog: read-only card definitions supplied by the card store
- classifier: ordered keyword rules mapping text to a ParsedAction
- actions: the closed set of ParsedAction kinds the executor runs
"""

from .actions import CardActionType, ParsedAction, SpaceLookup, TARGETED_KINDS
from .catalog import CardCatalog, CardDefinition, CardRecord
from .classifier import (
    CardEffectClassifier,
    ClassificationReport,
    classify_card_effect,
)

__all__ = [
    "CardActionType",
    "ParsedAction",
    "SpaceLookup",
    "TARGETED_KINDS",
    "CardCatalog",
    "CardDefinition",
    "CardRecord",
    "CardEffectClassifier",
    "ClassificationReport",
    "classify_card_effect",
]
