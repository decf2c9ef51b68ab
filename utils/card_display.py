"""Formatting helpers used by the card tables and viewer."""

from __future__ import annotations

from utils.game_constants import CARD_TYPE_EVOLVED, PLAYSET_SIZE, RARITY_ABBREVIATIONS

_QUOTE_CHARS = ('"', "“", "”")


def extract_set_name(set_string: str | None) -> str:
    """
    Return the set title from a raw set column.

    The exports wrap the set name in straight or curly quotes, e.g.
    ``BP01 "Advent of Genesis"``. Without two quotes the trimmed input is returned.
    """
    if not set_string or not set_string.strip():
        return ""

    first = _find_quote(set_string, 0)
    if first < 0:
        return set_string.strip()
    second = _find_quote(set_string, first + 1)
    if second < 0:
        return set_string.strip()
    return set_string[first + 1 : second].strip()


def _find_quote(text: str, start: int) -> int:
    positions = [pos for pos in (text.find(q, start) for q in _QUOTE_CHARS) if pos >= 0]
    return min(positions) if positions else -1


def rarity_abbreviation(rarity: str | None) -> str:
    """Abbreviate a rarity string such as ``"Gold / Premium"`` to ``"G/P"``."""
    if not rarity or not rarity.strip():
        return ""

    abbreviations: list[str] = []
    for part in rarity.split("/"):
        part = part.strip()
        if not part:
            continue
        known = RARITY_ABBREVIATIONS.get(" ".join(part.split()).lower())
        if known:
            abbreviations.append(known)
            continue
        tokens = part.split()
        if len(tokens) == 1:
            abbreviations.append(tokens[0][:1].upper())
        else:
            abbreviations.append("".join(token[0] for token in tokens).upper())
    return "/".join(abbreviations)


def quantity_category(total: int, copies_needed: int = PLAYSET_SIZE) -> str:
    """Bucket an owned count into ``None`` / ``Low`` / ``High`` for row colouring."""
    try:
        value = int(total)
    except (TypeError, ValueError):
        return "None"
    if value <= 0:
        return "None"
    if value < copies_needed:
        return "Low"
    return "High"


def evolved_display_name(name: str | None, card_type: str | None) -> str:
    name = name or ""
    if card_type and CARD_TYPE_EVOLVED.lower() in card_type.lower():
        return f"{name} (Evolved)"
    return name


__all__ = [
    "extract_set_name",
    "rarity_abbreviation",
    "quantity_category",
    "evolved_display_name",
]
