"""
Card Catalog - Read-only lookup of card definitions.

The catalog is supplied from outside the engine (a card store, a JSON
export, or the built-in Shitz Creek deck). Records are validated with
pydantic on the way in; after that the catalog never changes.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Iterator
import json

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from ..errors import CatalogError


class CardRecord(BaseModel):
    """
    Wire shape of one card.

    Accepts the store's column names (card_name, card_effect) as well as
    the engine's own field names.
    """
    id: str = Field(..., min_length=1)
    display_name: str = Field(
        ..., validation_alias=AliasChoices("display_name", "card_name", "name")
    )
    effect_text: str = Field(
        ..., validation_alias=AliasChoices("effect_text", "card_effect", "effect")
    )
    category: str = "shit_pile"
    flavor_text: str = Field(
        "", validation_alias=AliasChoices("flavor_text", "card_text")
    )


@dataclass(frozen=True)
class CardDefinition:
    """An immutable card. effect_text is what the classifier reads."""
    id: str
    display_name: str
    effect_text: str
    category: str = "shit_pile"
    flavor_text: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "effect_text": self.effect_text,
            "category": self.category,
            "flavor_text": self.flavor_text,
        }


class CardCatalog:
    """
    Read-only id -> CardDefinition mapping, iterated in insertion order.

    Usage:
        catalog = CardCatalog.from_records(rows)
        card = catalog.get("sc_01")
    """

    def __init__(self, cards: Iterable[CardDefinition]):
        self._cards: dict[str, CardDefinition] = {}
        for card in cards:
            if card.id in self._cards:
                raise CatalogError(f"Duplicate card id '{card.id}'")
            self._cards[card.id] = card

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[CardDefinition]:
        return iter(self._cards.values())

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._cards

    def get(self, card_id: str) -> CardDefinition | None:
        return self._cards.get(card_id)

    def ids(self) -> list[str]:
        return list(self._cards)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> CardCatalog:
        """Validate raw dict records and build a catalog."""
        cards = []
        for idx, record in enumerate(records):
            try:
                parsed = CardRecord.model_validate(record)
            except ValidationError as e:
                raise CatalogError(f"Invalid card record at index {idx}: {e}") from e
            cards.append(CardDefinition(
                id=parsed.id,
                display_name=parsed.display_name,
                effect_text=parsed.effect_text,
                category=parsed.category,
                flavor_text=parsed.flavor_text,
            ))
        return cls(cards)

    @classmethod
    def from_json_file(cls, path: str | Path) -> CardCatalog:
        """Load a catalog from a JSON list (or {"cards": [...]}) on disk."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get("cards", [])
        if not isinstance(data, list):
            raise CatalogError(f"{path}: expected a list of card records")
        return cls.from_records(data)
