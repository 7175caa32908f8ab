"""
Deck - Draw-without-replacement card pile with lazy reshuffle.

Works like a physical deck: cards come off the top of the draw pile and
land on the discard pile. Only when the draw pile is empty is the whole
discard pile shuffled back in.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ..errors import DeckError, EmptyDeckError
from ..logging_config import get_logger
from .state import DeckState

if TYPE_CHECKING:
    import random

logger = get_logger(__name__)


@dataclass
class DrawResult:
    """Result of drawing one card."""
    card_id: str
    deck: DeckState
    reshuffled: bool = False


def shuffled(card_ids: list[str], rng: random.Random) -> list[str]:
    """Return a shuffled copy of card_ids."""
    cards = list(card_ids)
    rng.shuffle(cards)
    return cards


def initialize_deck(card_ids: list[str], rng: random.Random) -> DeckState:
    """
    Create a deck with every card shuffled into the draw pile.

    Raises DeckError on duplicate ids, since a duplicate would break the
    one-pile-per-card invariant.
    """
    if len(set(card_ids)) != len(card_ids):
        raise DeckError("Deck contains duplicate card ids")

    return DeckState(
        draw_pile=shuffled(card_ids, rng),
        discard_pile=[],
        total_cards=len(card_ids),
        reshuffle_count=0,
    )


def draw_card(deck: DeckState, rng: random.Random) -> DrawResult:
    """
    Draw the top card.

    The drawn id goes straight to the discard pile. If the draw pile is
    empty the discard pile is reshuffled first. Raises EmptyDeckError
    when there are no cards at all.
    """
    draw_pile = list(deck.draw_pile)
    discard_pile = list(deck.discard_pile)
    reshuffle_count = deck.reshuffle_count
    reshuffled = False

    if not draw_pile:
        if not discard_pile:
            raise EmptyDeckError()
        draw_pile = shuffled(discard_pile, rng)
        discard_pile = []
        reshuffled = True
        reshuffle_count += 1
        logger.debug("reshuffled %d cards into the draw pile", len(draw_pile))

    card_id = draw_pile.pop(0)
    discard_pile.append(card_id)

    return DrawResult(
        card_id=card_id,
        deck=DeckState(
            draw_pile=draw_pile,
            discard_pile=discard_pile,
            total_cards=deck.total_cards,
            reshuffle_count=reshuffle_count,
        ),
        reshuffled=reshuffled,
    )


def cards_remaining(deck: DeckState) -> int:
    """Number of cards left in the draw pile."""
    return len(deck.draw_pile)


def cards_discarded(deck: DeckState) -> int:
    """Number of cards in the discard pile."""
    return len(deck.discard_pile)
