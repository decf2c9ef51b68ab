"""Card records loaded from the CSV exports plus the user's collection state."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from utils.card_display import evolved_display_name
from utils.constants import CARD_IMAGES_DIR
from utils.game_constants import (
    CARD_TYPE_EVOLVED,
    CARD_TYPE_LEADER,
    CARD_TYPE_TOKEN,
    GLORYFINDER_FORMAT,
    PLAYSET_SIZE,
    SINGLETON_PLAYSET_SIZE,
)


@dataclass(frozen=True, eq=False)
class RelatedCard:
    """A (name, type) reference to another card; compared case-insensitively."""

    card_name: str = ""
    card_type: str = ""

    def _key(self) -> tuple[str, str]:
        return (self.card_name or "").upper(), (self.card_type or "").upper()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RelatedCard):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def to_dict(self) -> dict[str, str]:
        return {"CardName": self.card_name, "CardType": self.card_type}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RelatedCard:
        lowered = {str(k).lower(): v for k, v in data.items()}
        return cls(
            card_name=str(lowered.get("cardname") or ""),
            card_type=str(lowered.get("cardtype") or ""),
        )


# JSON key -> attribute name, in the order written to savedCards.json
_TEXT_FIELDS: dict[str, str] = {
    "Name": "name",
    "CardNumber": "card_number",
    "Rarity": "rarity",
    "Set": "card_set",
    "Format": "format",
    "Class": "card_class",
    "Type": "card_type",
    "Traits": "traits",
    "Cost": "cost",
    "Attack": "attack",
    "Defense": "defense",
    "Text": "text",
}


def _contains(haystack: str | None, needle: str) -> bool:
    return bool(haystack) and needle.lower() in haystack.lower()


@dataclass(eq=False)
class CardData:
    """One printing of a card. Identity semantics: two printings are never equal."""

    name: str = ""
    card_number: str = ""
    rarity: str = ""
    card_set: str = ""
    format: str = ""
    card_class: str = ""
    card_type: str = ""
    traits: str = ""
    cost: str = ""
    attack: str = ""
    defense: str = ""
    text: str = ""
    quantity_owned: int = 0
    is_favorite: bool = False
    wishlist_desired_quantity: int = 0
    related_cards: set[RelatedCard] = field(default_factory=set)

    def __post_init__(self) -> None:
        self.wishlist_desired_quantity = max(0, int(self.wishlist_desired_quantity or 0))
        self.quantity_owned = int(self.quantity_owned or 0)

    # ============= Card Type Checks =============

    @property
    def is_leader(self) -> bool:
        return _contains(self.card_type, CARD_TYPE_LEADER)

    @property
    def is_token(self) -> bool:
        return _contains(self.card_type, CARD_TYPE_TOKEN)

    @property
    def is_evolved(self) -> bool:
        return _contains(self.card_type, CARD_TYPE_EVOLVED)

    @property
    def display_name(self) -> str:
        return evolved_display_name(self.name, self.card_type)

    # ============= Playset / Wishlist =============

    @property
    def copies_needed_for_playset(self) -> int:
        """Leaders, tokens and Gloryfinder-only printings need a single copy; everything else three."""
        if self.is_leader or self.is_token:
            return SINGLETON_PLAYSET_SIZE
        if (self.format or "").strip().lower() == GLORYFINDER_FORMAT:
            return SINGLETON_PLAYSET_SIZE
        return PLAYSET_SIZE

    @property
    def missing_for_playset(self) -> int:
        return max(0, self.copies_needed_for_playset - self.quantity_owned)

    @property
    def is_wishlisted(self) -> bool:
        return self.wishlist_desired_quantity > 0

    @is_wishlisted.setter
    def is_wishlisted(self, value: bool) -> None:
        if value and self.is_wishlisted:
            return
        self.set_wishlist_quantity(max(1, self.missing_for_playset) if value else 0)

    def set_wishlist_quantity(self, quantity: int) -> None:
        self.wishlist_desired_quantity = max(0, int(quantity))

    @property
    def image_file(self) -> Path:
        return CARD_IMAGES_DIR / f"{self.card_number}.png"

    # ============= Serialization =============

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {key: getattr(self, attr) for key, attr in _TEXT_FIELDS.items()}
        data["RelatedCards"] = [
            related.to_dict()
            for related in sorted(self.related_cards, key=lambda r: (r.card_name.lower(), r.card_type.lower()))
        ]
        data["QuantityOwned"] = self.quantity_owned
        data["IsFavorite"] = self.is_favorite
        data["WishlistDesiredQuantity"] = self.wishlist_desired_quantity
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CardData:
        """Build a card from a saved entry; keys are matched case-insensitively."""
        lowered = {str(k).lower(): v for k, v in data.items()}
        kwargs: dict[str, Any] = {
            attr: str(lowered.get(key.lower()) or "") for key, attr in _TEXT_FIELDS.items()
        }
        related_raw = lowered.get("relatedcards") or []
        related = {
            RelatedCard.from_dict(entry) for entry in related_raw if isinstance(entry, dict)
        }
        return cls(
            **kwargs,
            quantity_owned=_coerce_int(lowered.get("quantityowned")),
            is_favorite=_coerce_bool(lowered.get("isfavorite")),
            wishlist_desired_quantity=_coerce_int(lowered.get("wishlistdesiredquantity")),
            related_cards=related,
        )

    def __repr__(self) -> str:
        return f"CardData({self.card_number!r}, {self.name!r}, {self.card_type!r})"


def _coerce_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes"}
    if isinstance(value, int):
        return value != 0
    return False


__all__ = ["CardData", "RelatedCard"]
