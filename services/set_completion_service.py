"""
Set Completion Service - Per-set collection progress.

For every set four percentages are reported:
- 1 Card: printings with at least one copy owned
- Playset: owned copies (capped at the playset size) over copies needed
- Unique 1 Card: distinct cards (printings combined, leaders excluded) owned in any printing
- Unique Playset: combined copies (capped) over copies needed for those distinct cards
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from models.card import CardData
from models.collection import CombinedCardCount, SetCompletionRow


def round_percent(part: int, total: int) -> int:
    """Whole-number percentage rounded half away from zero; an empty total counts as complete."""
    if total == 0:
        return 100
    value = part * 100.0 / total
    return int(math.floor(value + 0.5)) if value >= 0 else -int(math.floor(-value + 0.5))


def _group_key(card: CardData) -> tuple[str, bool]:
    return (card.name or "").strip(), card.is_evolved


class SetCompletionService:
    """Builds the rows of the Set Completion tab."""

    def completion_rows(self, cards: Iterable[CardData]) -> list[SetCompletionRow]:
        """
        Compute completion for every non-blank set.

        Args:
            cards: The full card list

        Returns:
            One row per set, sorted by set name (case-insensitive)
        """
        cards = list(cards)

        by_set: dict[str, list[CardData]] = {}
        for card in cards:
            set_name = (card.card_set or "").strip()
            if set_name:
                by_set.setdefault(set_name, []).append(card)

        # Unique totals span every printing in the collection, not only this set's
        combined: dict[tuple[str, bool], CombinedCardCount] = {}
        grouped: dict[tuple[str, bool], list[CardData]] = {}
        for card in cards:
            grouped.setdefault(_group_key(card), []).append(card)
        for key, group_cards in grouped.items():
            combined[key] = CombinedCardCount(group_cards)

        rows = [self._row(set_name, set_cards, combined) for set_name, set_cards in by_set.items()]
        rows.sort(key=lambda row: row.set_name.lower())
        return rows

    @staticmethod
    def _row(
        set_name: str,
        set_cards: list[CardData],
        combined: dict[tuple[str, bool], CombinedCardCount],
    ) -> SetCompletionRow:
        total_cards = len(set_cards)
        owned_at_least_one = sum(1 for card in set_cards if card.quantity_owned > 0)
        playset_owned = sum(min(card.quantity_owned, card.copies_needed_for_playset) for card in set_cards)
        playset_total = sum(card.copies_needed_for_playset for card in set_cards)

        unique_keys: list[tuple[str, bool]] = []
        for card in set_cards:
            key = _group_key(card)
            if key not in unique_keys:
                unique_keys.append(key)
        # Leader groups are judged by the first printing of the group in this set
        unique_keys = [
            key for key in unique_keys if not next(c for c in set_cards if _group_key(c) == key).is_leader
        ]
        unique_groups = [combined[key] for key in unique_keys]

        total_unique = len(unique_keys)
        unique_owned = sum(1 for group in unique_groups if group.total_quantity_owned > 0)
        unique_copies_owned = sum(
            min(group.total_quantity_owned, group.copies_needed_for_playset) for group in unique_groups
        )
        unique_copies_needed = sum(group.copies_needed_for_playset for group in unique_groups)
        unique_playsets = sum(
            1 for group in unique_groups if group.total_quantity_owned >= group.copies_needed_for_playset
        )

        return SetCompletionRow(
            set_name=set_name,
            one_card_percent=round_percent(owned_at_least_one, total_cards),
            playset_percent=round_percent(playset_owned, playset_total),
            unique_one_card_percent=round_percent(unique_owned, total_unique),
            unique_playset_percent=round_percent(unique_copies_owned, unique_copies_needed),
            total_cards=total_cards,
            owned_at_least_one=owned_at_least_one,
            playset_owned=playset_owned,
            playset_total=playset_total,
            total_unique_cards=total_unique,
            unique_owned_at_least_one=unique_owned,
            unique_playset_owned=unique_playsets,
        )


# Global instance
_default_service = None


def get_set_completion_service() -> SetCompletionService:
    """Get the default set completion service instance."""
    global _default_service
    if _default_service is None:
        _default_service = SetCompletionService()
    return _default_service


def reset_set_completion_service() -> None:
    """Reset the global set completion service instance."""
    global _default_service
    _default_service = None
