"""
Tests for the card catalog.
"""

import json

import pytest

from ..card_effects.catalog import CardCatalog, CardDefinition
from ..errors import CatalogError


class TestCardCatalog:
    """Tests for catalog construction and lookup."""

    def test_builtin_catalog(self, catalog):
        assert len(catalog) == 50
        assert "sc_17" in catalog
        assert catalog.get("sc_17").effect_text == "Steal a paddle from any player of your choice"
        assert catalog.get("missing") is None

    def test_store_column_names(self):
        """The card store's card_name/card_effect/card_text columns are accepted."""
        catalog = CardCatalog.from_records([
            {"id": "c1", "card_name": "Pirate", "card_effect": "Take a paddle", "card_text": "Arr."},
        ])
        card = catalog.get("c1")

        assert card.display_name == "Pirate"
        assert card.effect_text == "Take a paddle"
        assert card.flavor_text == "Arr."
        assert card.category == "shit_pile"

    def test_invalid_record(self):
        with pytest.raises(CatalogError):
            CardCatalog.from_records([{"id": "c1", "card_name": "No effect"}])

    def test_duplicate_ids(self):
        card = CardDefinition(id="c1", display_name="A", effect_text="Draw again")
        with pytest.raises(CatalogError):
            CardCatalog([card, card])

    def test_iteration_order(self):
        cards = [
            CardDefinition(id="b", display_name="B", effect_text="Draw again"),
            CardDefinition(id="a", display_name="A", effect_text="Draw again"),
        ]
        assert CardCatalog(cards).ids() == ["b", "a"]

    def test_from_json_file(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps({"cards": [
            {"id": "c1", "name": "One", "effect": "Back three"},
        ]}))

        catalog = CardCatalog.from_json_file(path)

        assert catalog.ids() == ["c1"]
        assert catalog.get("c1").to_dict()["effect_text"] == "Back three"

    def test_from_json_file_rejects_scalar(self, tmp_path):
        path = tmp_path / "cards.json"
        path.write_text(json.dumps("nope"))
        with pytest.raises(CatalogError):
            CardCatalog.from_json_file(path)
