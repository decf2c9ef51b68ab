"""
Models package - plain data records shared by repositories, services and widgets.
"""

from models.card import CardData, RelatedCard
from models.collection import CombinedCardCount, SetCompletionRow
from models.deck import Deck, DeckEntry, DeckType

__all__ = [
    "CardData",
    "CombinedCardCount",
    "Deck",
    "DeckEntry",
    "DeckType",
    "RelatedCard",
    "SetCompletionRow",
]
