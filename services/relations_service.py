"""
Relations Service - Finds cards that reference each other.

Two cards are related when both have a name and either:
1. They share a name but have different types (e.g. a follower and its evolved form)
2. One card's text mentions the other card's name

Both checks are case-insensitive. The scan compares every pair of cards.
"""

from __future__ import annotations

from collections.abc import Iterable

from loguru import logger

from models.card import CardData, RelatedCard


def _same(left: str | None, right: str | None) -> bool:
    return (left or "").lower() == (right or "").lower()


def are_cards_related(card1: CardData, card2: CardData) -> bool:
    name1 = card1.name or ""
    name2 = card2.name or ""
    if not name1.strip() or not name2.strip():
        return False

    if _same(name1, name2) and not _same(card1.card_type, card2.card_type):
        return True

    text1 = card1.text or ""
    text2 = card2.text or ""
    if text1.strip() and name2.lower() in text1.lower():
        return True
    if text2.strip() and name1.lower() in text2.lower():
        return True
    return False


class RelationsService:
    """Service for card relation lookups."""

    # ============= Relation Discovery =============

    def find_card_relations_result(self, cards: Iterable[CardData]) -> list[set[RelatedCard]]:
        """
        Compute relations without touching the cards.

        Args:
            cards: Cards to scan

        Returns:
            One set of RelatedCard per input card, in input order
        """
        cards = list(cards)
        results: list[set[RelatedCard]] = [set() for _ in cards]
        for i, card1 in enumerate(cards):
            for j in range(i + 1, len(cards)):
                card2 = cards[j]
                if are_cards_related(card1, card2):
                    results[i].add(RelatedCard(card2.name, card2.card_type))
                    results[j].add(RelatedCard(card1.name, card1.card_type))
        return results

    def find_card_relations(self, cards: Iterable[CardData]) -> int:
        """
        Recompute ``related_cards`` on every card.

        Returns:
            Number of related pairs found
        """
        cards = list(cards)
        for card in cards:
            card.related_cards.clear()

        pairs = 0
        for i, card1 in enumerate(cards):
            for card2 in cards[i + 1 :]:
                if are_cards_related(card1, card2):
                    card1.related_cards.add(RelatedCard(card2.name, card2.card_type))
                    card2.related_cards.add(RelatedCard(card1.name, card1.card_type))
                    pairs += 1

        logger.info(f"Found {pairs} card relation(s) across {len(cards)} cards")
        return pairs

    @staticmethod
    def apply_relations(cards: list[CardData], results: list[set[RelatedCard]]) -> None:
        """Assign a result from find_card_relations_result back onto the cards."""
        for card, related in zip(cards, results):
            card.related_cards = set(related)

    # ============= Related Printings =============

    def get_related_card_instances(self, source: CardData | None, cards: Iterable[CardData]) -> list[CardData]:
        """
        Pick one printing for each card related to ``source``.

        Candidates must match the related name and type. Printings from the same
        set and rarity as the source win, then same set, then same rarity.
        """
        if source is None or not source.related_cards:
            return []

        cards = list(cards)
        result: list[CardData] = []
        for related in sorted(source.related_cards, key=lambda r: (r.card_name.lower(), r.card_type.lower())):
            candidates = [
                c for c in cards if _same(c.name, related.card_name) and _same(c.card_type, related.card_type)
            ]
            if not candidates:
                continue
            # max() keeps the first candidate among equal ranks
            best = max(
                candidates,
                key=lambda c: (
                    _same(c.card_set, source.card_set) and _same(c.rarity, source.rarity),
                    _same(c.card_set, source.card_set),
                    _same(c.rarity, source.rarity),
                ),
            )
            result.append(best)
        return result


# Global instance
_default_service = None


def get_relations_service() -> RelationsService:
    """Get the default relations service instance."""
    global _default_service
    if _default_service is None:
        _default_service = RelationsService()
    return _default_service


def reset_relations_service() -> None:
    """Reset the global relations service instance."""
    global _default_service
    _default_service = None
