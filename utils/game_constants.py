"""Gameplay-related constants shared across services."""

NEUTRAL_CLASS = "Neutral"

CLASS_OPTIONS: list[str] = [
    "Forestcraft",
    "Swordcraft",
    "Runecraft",
    "Dragoncraft",
    "Abysscraft",
    "Havencraft",
    NEUTRAL_CLASS,
]

CARD_TYPE_LEADER = "Leader"
CARD_TYPE_EVOLVED = "Evolved"
CARD_TYPE_TOKEN = "Token"

CARD_TYPE_OPTIONS: list[str] = [
    CARD_TYPE_LEADER,
    "Follower",
    CARD_TYPE_EVOLVED,
    "Spell",
    "Amulet",
    CARD_TYPE_TOKEN,
]

RARITY_OPTIONS: list[str] = [
    "Bronze",
    "Silver",
    "Gold",
    "Legendary",
    "Super Legendary",
    "Ultimate",
    "Special",
    "Premium",
    "-",
]

RARITY_ABBREVIATIONS: dict[str, str] = {
    "bronze": "B",
    "silver": "S",
    "gold": "G",
    "legendary": "L",
    "super legendary": "SL",
    "ultimate": "U",
    "special": "SP",
    "premium": "P",
}

OWNED_LABEL = "Owned"
UNOWNED_LABEL = "Unowned"
OWNED_OPTIONS: list[str] = [OWNED_LABEL, UNOWNED_LABEL]

GLORYFINDER_FORMAT = "gloryfinder"

# Copy limits
PLAYSET_SIZE = 3
SINGLETON_PLAYSET_SIZE = 1
MAX_COPIES_PER_CARD = 3

# Deck size limits
MAIN_DECK_MIN = 40
MAIN_DECK_MAX = 50
EVOLVE_DECK_MAX = 10
GLORYFINDER_MAIN_DECK_SIZE = 50
GLORYFINDER_EVOLVE_DECK_MAX = 20

IN_DECK_OPTIONS: list[str] = ["0", "1", "2", "3"]
GLORYFINDER_IN_DECK_OPTIONS: list[str] = ["0", "1"]

__all__ = [
    "NEUTRAL_CLASS",
    "CLASS_OPTIONS",
    "CARD_TYPE_LEADER",
    "CARD_TYPE_EVOLVED",
    "CARD_TYPE_TOKEN",
    "CARD_TYPE_OPTIONS",
    "RARITY_OPTIONS",
    "RARITY_ABBREVIATIONS",
    "OWNED_LABEL",
    "UNOWNED_LABEL",
    "OWNED_OPTIONS",
    "GLORYFINDER_FORMAT",
    "PLAYSET_SIZE",
    "SINGLETON_PLAYSET_SIZE",
    "MAX_COPIES_PER_CARD",
    "MAIN_DECK_MIN",
    "MAIN_DECK_MAX",
    "EVOLVE_DECK_MAX",
    "GLORYFINDER_MAIN_DECK_SIZE",
    "GLORYFINDER_EVOLVE_DECK_MAX",
    "IN_DECK_OPTIONS",
    "GLORYFINDER_IN_DECK_OPTIONS",
]
