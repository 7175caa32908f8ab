"""
Shitz Creek Cards - The built-in Shit Pile deck.

Effect texts are the ones printed on the physical cards. Several cards
share an effect, as in the printed deck. A live deployment normally
loads its cards from the card store instead (CardCatalog.from_records).
"""

from __future__ import annotations

from ...card_effects.catalog import CardCatalog, CardDefinition


def _card(number: int, name: str, effect: str, flavor: str = "") -> CardDefinition:
    return CardDefinition(
        id=f"sc_{number:02d}",
        display_name=name,
        effect_text=effect,
        category="shit_pile",
        flavor_text=flavor,
    )


SHITZ_CREEK_CARDS: list[CardDefinition] = [
    # Movement
    _card(1, "Slippery Bank", "Two steps back", "Mud everywhere."),
    _card(2, "Undertow", "Move back two spaces"),
    _card(3, "Backwash", "Back three"),
    _card(4, "Wrong Turn", "Go back three"),
    _card(5, "Rapids", "Back five steps", "Hold on to something."),
    _card(6, "Tailwind", "Move ahead two spaces"),
    _card(7, "Current Shift", "Move back two spaces"),

    # Paddles
    _card(8, "Lucky Find", "Get a paddle"),
    _card(9, "Giveaway", "Free paddle"),
    _card(10, "Yard Sale", "Get a free paddle"),
    _card(11, "Lost and Found", "Found a lost paddle", "Smells a bit."),
    _card(12, "Butterfingers", "Lose paddle left"),
    _card(13, "Overboard", "Lose a paddle"),
    _card(14, "Snapped", "You lose a paddle"),
    _card(15, "Guilty Conscience", "Put paddle back"),
    _card(16, "Rental Return", "Return a paddle"),
    _card(17, "Pirate", "Steal a paddle from any player of your choice", "Arr."),
    _card(18, "Sticky Fingers", "Take a paddle from anyone"),
    _card(19, "Five Finger Discount", "Take a paddle"),
    _card(20, "Good Neighbour", "Gift a paddle to your right"),
    _card(21, "Charity", "Gift a paddle"),
    _card(22, "Paddle Run", "Go to shop and get a paddle"),

    # Turns
    _card(23, "Bathroom Break", "Lose a turn"),
    _card(24, "Food Poisoning", "Lose your next turn"),
    _card(25, "Nap Time", "Lose turn"),
    _card(26, "Second Wind", "Take another turn"),
    _card(27, "Double Dip", "Draw again"),
    _card(28, "Another One", "Draw again"),

    # Go to a space
    _card(29, "Clear Skies", "Go to the next blue space"),
    _card(30, "Magnet", "Go to the closest yellow"),
    _card(31, "Drain Pipe", "Go to the sewer", "It only gets worse."),
    _card(32, "Happy Hour", "You're shitfaced"),
    _card(33, "Window Shopping", "Return to paddle shop"),
    _card(34, "Forgot Something", "Go back to paddle shop"),
    _card(35, "Pooper Scooper", "Clean dog poo"),
    _card(36, "Nose Plug", "Skip the next yellow space"),
    _card(37, "Gas Mask", "Skip the next yellow space"),

    # Leading the pack
    _card(38, "Shortcut", "Take a lead"),
    _card(39, "Speedboat", "Move to the lead"),
    _card(40, "Jet Ski", "Move ahead of everyone"),
    _card(41, "Slipstream", "Move ahead of any player"),
    _card(42, "Reality Check", "Three spaces behind leader"),

    # Messing with other players
    _card(43, "Company", "You and another player go to the sewer"),
    _card(44, "Traffic Cop", "Send another player to the crossing"),
    _card(45, "Tow Rope", "Bring another to your space"),
    _card(46, "Party Boat", "Bring all players to your space", "Everyone aboard."),
    _card(47, "Buddy System", "Go back with closest player"),
    _card(48, "Dead Weight", "Move a player behind last player"),
    _card(49, "Bad Map", "Move back two spaces"),
    _card(50, "Floater", "Two steps back"),
]


def default_catalog() -> CardCatalog:
    """The built-in deck as a CardCatalog."""
    return CardCatalog(SHITZ_CREEK_CARDS)


BOT_NAMES = [
    "Robo-Flush",
    "Toilet-Tron",
    "Poo-Bot 3000",
    "Captain Crap",
    "Sir Stinks-a-Lot",
    "The Dookie Duke",
    "Professor Plop",
    "Baron von Bowel",
    "Count Commode",
]
