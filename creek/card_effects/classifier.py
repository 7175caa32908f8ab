"""
Card Effect Classifier - Maps free card text to a ParsedAction.

Cards are authored by humans, so this is a best-effort keyword matcher:
an ordered list of rules, first match wins. Text that no rule matches
becomes an UNRECOGNIZED no-op that still carries the card text, so the
player sees the card even when it does nothing mechanically.

The classifier is pure and independent of the executor so that a
misclassified card can be caught with a one-line test.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Callable, TYPE_CHECKING
import re

from ..engine_core.board import SpaceType
from ..logging_config import get_logger
from .actions import CardActionType, ParsedAction, SpaceLookup

if TYPE_CHECKING:
    from .catalog import CardCatalog

logger = get_logger(__name__)

A = CardActionType

NUMBER_WORDS = {
    "ONE": 1,
    "TWO": 2,
    "THREE": 3,
    "FOUR": 4,
    "FIVE": 5,
    "SIX": 6,
}
_NUM = r"(\d+|ONE|TWO|THREE|FOUR|FIVE|SIX)"

_BACK_N = re.compile(rf"\bBACK {_NUM}\b|\b{_NUM} (?:STEPS?|SPACES?) BACK\b")
_FORWARD_N = re.compile(
    rf"\b(?:AHEAD|FORWARD) {_NUM}\b|\b{_NUM} (?:STEPS?|SPACES?) (?:AHEAD|FORWARD)\b"
)
_ANY_N = re.compile(rf"\b{_NUM}\b")

# Keyword -> space kind, checked in order
_SPACE_KEYWORDS: list[tuple[re.Pattern[str], SpaceType]] = [
    (re.compile(r"\bSHIT PILE\b|\bYELLOW\b"), SpaceType.SHIT_PILE),
    (re.compile(r"\bPADDLE SHOP\b|\bSHOP\b"), SpaceType.PADDLE_SHOP),
    (re.compile(r"\bDOG POO\b"), SpaceType.DOG_POO),
    (re.compile(r"\bSEWER\b"), SpaceType.SEWER),
    (re.compile(r"\bSHITFACED\b"), SpaceType.SHITFACED),
    (re.compile(r"\bCROSSING\b"), SpaceType.CROSSING),
    (re.compile(r"\bBLUE\b"), SpaceType.BLUE),
    (re.compile(r"\bGREEN\b"), SpaceType.GREEN),
    (re.compile(r"\bRED\b"), SpaceType.RED),
    (re.compile(r"\bSTART\b"), SpaceType.START),
]


def normalize(text: str) -> str:
    """Upper-case, collapse whitespace, drop trailing punctuation."""
    return " ".join(text.upper().split()).rstrip(".!?")


def _to_int(token: str) -> int:
    return NUMBER_WORDS.get(token) or int(token)


def _match_number(pattern: re.Pattern[str], e: str) -> int | None:
    m = pattern.search(e)
    if not m:
        return None
    token = next(g for g in m.groups() if g)
    return _to_int(token)


def _first_number(e: str, default: int) -> int:
    found = _match_number(_ANY_N, e)
    return found if found is not None else default


def find_space_kind(e: str) -> SpaceType | None:
    """The first space kind named in normalized text, if any."""
    for pattern, space_type in _SPACE_KEYWORDS:
        if pattern.search(e):
            return space_type
    return None


# A rule takes (normalized text, original text) and returns an action or None
Rule = Callable[[str, str], "ParsedAction | None"]


def _draw_again(e: str, text: str) -> ParsedAction | None:
    if e == "DRAW AGAIN" or "DRAW ANOTHER CARD" in e:
        return ParsedAction.of(A.DRAW_AGAIN, text)
    return None


def _skip_yellow(e: str, text: str) -> ParsedAction | None:
    if "SKIP" in e and ("YELLOW" in e or "SHIT PILE" in e):
        return ParsedAction.of(A.SKIP_YELLOW, text)
    return None


def _go_back_with_player(e: str, text: str) -> ParsedAction | None:
    if "BACK WITH" in e and ("CLOSEST" in e or "NEAREST" in e):
        return ParsedAction.of(A.GO_BACK_WITH_PLAYER, text, magnitude=_first_number(e, 3))
    return None


def _behind_leader(e: str, text: str) -> ParsedAction | None:
    if re.search(r"\bBEHIND (?:THE )?LEADER\b", e):
        return ParsedAction.of(A.BEHIND_LEADER, text, magnitude=_first_number(e, 3))
    return None


def _move_player_behind_last(e: str, text: str) -> ParsedAction | None:
    if "MOVE A PLAYER BEHIND" in e or "BEHIND LAST" in e:
        return ParsedAction.of(A.MOVE_PLAYER_BEHIND_LAST, text)
    return None


def _bring_players(e: str, text: str) -> ParsedAction | None:
    if re.search(r"\bBRING (?:ALL|EVERYONE|EVERY PLAYER)\b", e):
        return ParsedAction.of(A.BRING_ALL_PLAYERS, text)
    if re.search(r"\bBRING (?:ANOTHER|A PLAYER|ANY PLAYER|SOMEONE)\b", e):
        return ParsedAction.of(A.BRING_PLAYER, text)
    return None


def _take_lead(e: str, text: str) -> ParsedAction | None:
    if e in {"TAKE A LEAD", "TAKE THE LEAD", "MOVE TO THE LEAD", "MOVE AHEAD OF EVERYONE"}:
        return ParsedAction.of(A.TAKE_LEAD, text)
    return None


def _move_ahead_of_player(e: str, text: str) -> ParsedAction | None:
    if re.search(r"\bAHEAD OF (?:ANY|A|ANOTHER) PLAYER\b", e):
        return ParsedAction.of(A.MOVE_AHEAD_OF_PLAYER, text)
    return None


def _move_both_to_space(e: str, text: str) -> ParsedAction | None:
    if "YOU AND ANOTHER" in e:
        kind = find_space_kind(e)
        if kind is not None:
            return ParsedAction.of(
                A.MOVE_BOTH_TO_SPACE, text, target_space=kind, lookup=SpaceLookup.CLOSEST
            )
    return None


def _send_player_to(e: str, text: str) -> ParsedAction | None:
    if "SEND" in e or ("ANOTHER" in e and "CROSSING" in e):
        kind = find_space_kind(e)
        if kind is not None:
            return ParsedAction.of(
                A.SEND_PLAYER_TO, text, target_space=kind, lookup=SpaceLookup.CLOSEST
            )
    return None


def _go_to_shop_and_gain(e: str, text: str) -> ParsedAction | None:
    if "SHOP" in e and re.search(r"\b(?:GET|GAIN|TAKE) A (?:FREE )?PADDLE\b", e):
        return ParsedAction.of(
            A.GO_TO_SPACE_AND_GAIN_PADDLE,
            text,
            magnitude=1,
            target_space=SpaceType.PADDLE_SHOP,
            lookup=SpaceLookup.CLOSEST,
        )
    return None


def _paddle_steal(e: str, text: str) -> ParsedAction | None:
    if re.search(r"\b(?:STEAL|TAKE) A PADDLE\b", e):
        return ParsedAction.of(A.PADDLE_STEAL, text)
    return None


def _paddle_gift(e: str, text: str) -> ParsedAction | None:
    if not re.search(r"\b(?:GIFT|GIVE) A PADDLE\b", e):
        return None
    if re.search(r"\bTO (?:YOUR|THE) RIGHT\b", e):
        return ParsedAction.of(A.PADDLE_GIFT_RIGHT, text)
    return ParsedAction.of(A.PADDLE_GIFT_CHOOSE, text)


def _paddle_lose(e: str, text: str) -> ParsedAction | None:
    if (
        re.search(r"\bLOSE\b.*\bPADDLES?\b", e)
        or "PUT PADDLE BACK" in e
        or "RETURN A PADDLE" in e
    ):
        return ParsedAction.of(A.PADDLE_LOSE, text, magnitude=_first_number(e, 1))
    return None


def _paddle_gain(e: str, text: str) -> ParsedAction | None:
    if "FREE PADDLE" in e or re.search(r"\b(?:GET|GAIN|FOUND|FIND|RECEIVE)\b.*\bPADDLES?\b", e):
        return ParsedAction.of(A.PADDLE_GAIN, text, magnitude=_first_number(e, 1))
    return None


def _lose_turn(e: str, text: str) -> ParsedAction | None:
    if re.search(r"\b(?:LOSE|MISS|SKIP) (?:A |YOUR (?:NEXT )?)?TURN\b", e):
        return ParsedAction.of(A.LOSE_TURN, text)
    return None


def _extra_turn(e: str, text: str) -> ParsedAction | None:
    if "TAKE ANOTHER TURN" in e or "EXTRA TURN" in e or "ROLL AGAIN" in e:
        return ParsedAction.of(A.EXTRA_TURN, text)
    return None


def _move_back(e: str, text: str) -> ParsedAction | None:
    steps = _match_number(_BACK_N, e)
    if steps is not None:
        return ParsedAction.of(A.MOVE_BACK, text, magnitude=steps)
    return None


def _move_forward(e: str, text: str) -> ParsedAction | None:
    steps = _match_number(_FORWARD_N, e)
    if steps is not None:
        return ParsedAction.of(A.MOVE_FORWARD, text, magnitude=steps)
    return None


def _go_to_space(e: str, text: str) -> ParsedAction | None:
    kind = find_space_kind(e)
    if kind is None:
        return None
    if kind == SpaceType.SHIT_PILE or "CLOSEST" in e or "NEAREST" in e:
        lookup = SpaceLookup.CLOSEST
    else:
        lookup = SpaceLookup.NEXT
    return ParsedAction.of(A.GO_TO_SPACE, text, target_space=kind, lookup=lookup)


# Order matters: multi-player and compound phrasings before the generic ones
RULES: list[Rule] = [
    _draw_again,
    _skip_yellow,
    _go_back_with_player,
    _behind_leader,
    _move_player_behind_last,
    _bring_players,
    _take_lead,
    _move_ahead_of_player,
    _move_both_to_space,
    _send_player_to,
    _go_to_shop_and_gain,
    _paddle_steal,
    _paddle_gift,
    _paddle_lose,
    _paddle_gain,
    _lose_turn,
    _extra_turn,
    _move_back,
    _move_forward,
    _go_to_space,
]


@lru_cache(maxsize=1024)
def classify_card_effect(text: str) -> ParsedAction:
    """
    Classify a card's effect text into a ParsedAction.

    Never raises; unknown text yields an UNRECOGNIZED no-op.
    """
    e = normalize(text)
    for rule in RULES:
        action = rule(e, text)
        if action is not None:
            return action
    logger.debug("unrecognized card text: %r", text)
    return ParsedAction.unrecognized(text)


@dataclass
class ClassificationReport:
    """Result of classifying a whole catalog."""
    total: int = 0
    recognized: int = 0
    by_kind: dict[str, int] = field(default_factory=dict)
    unrecognized_card_ids: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def coverage(self) -> float:
        return self.recognized / self.total if self.total else 1.0


class CardEffectClassifier:
    """
    Catalog-level front end to classify_card_effect.

    Usage:
        report = CardEffectClassifier().classify_catalog(catalog)
        for warning in report.warnings:
            print(warning)
    """

    def classify(self, text: str) -> ParsedAction:
        return classify_card_effect(text)

    def classify_catalog(self, catalog: CardCatalog) -> ClassificationReport:
        report = ClassificationReport()
        for card in catalog:
            action = self.classify(card.effect_text)
            report.total += 1
            report.by_kind[action.kind.value] = report.by_kind.get(action.kind.value, 0) + 1
            if action.is_noop:
                report.unrecognized_card_ids.append(card.id)
                report.warnings.append(
                    f"Card '{card.id}' ({card.display_name}): unrecognized effect {card.effect_text!r}"
                )
            else:
                report.recognized += 1
        if report.unrecognized_card_ids:
            logger.warning(
                "%d of %d cards have no mechanical effect",
                len(report.unrecognized_card_ids),
                report.total,
            )
        return report
