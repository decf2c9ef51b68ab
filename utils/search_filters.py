import re
from collections.abc import Iterable
from dataclasses import dataclass, field


def split_parts(value: str | None, separator: str = "/") -> list[str]:
    return [part.strip() for part in (value or "").split(separator) if part.strip()]


def matches_pattern(value: str | None, pattern: str | None) -> bool:
    """Case-insensitive regex search; an invalid pattern falls back to a substring test."""
    if not pattern or not pattern.strip():
        return True
    text = value or ""
    try:
        return re.search(pattern, text, re.IGNORECASE) is not None
    except re.error:
        return pattern.lower() in text.lower()


@dataclass
class FilterItem:
    name: str
    checked: bool = True


@dataclass
class FilterGroup:
    """A multi-select filter; it only narrows results while some item is unchecked."""

    items: list[FilterItem] = field(default_factory=list)

    @classmethod
    def from_names(cls, names: Iterable[str], checked: bool = True) -> "FilterGroup":
        return cls([FilterItem(name, checked) for name in names])

    @property
    def is_active(self) -> bool:
        return bool(self.items) and not all(item.checked for item in self.items)

    @property
    def checked_names(self) -> list[str]:
        return [item.name for item in self.items if item.checked]

    @property
    def names(self) -> list[str]:
        return [item.name for item in self.items]

    def select_all(self) -> None:
        for item in self.items:
            item.checked = True

    def clear_all(self) -> None:
        for item in self.items:
            item.checked = False

    def set_checked(self, name: str, checked: bool) -> None:
        for item in self.items:
            if item.name == name:
                item.checked = checked

    def rebuild(self, names: Iterable[str]) -> None:
        """Replace the options, keeping the checked state of names that survive."""
        previous = {item.name.lower(): item.checked for item in self.items}
        self.items = [FilterItem(name, previous.get(name.lower(), True)) for name in names]

    def matches_any_part(self, value: str | None) -> bool:
        """Any "/"-separated part equals a checked item."""
        if not self.is_active:
            return True
        parts = split_parts(value)
        if not parts:
            return False
        checked = {name.lower() for name in self.checked_names}
        return any(part.lower() in checked for part in parts)

    def matches_value(self, value: str | None) -> bool:
        """The trimmed value equals a checked item."""
        if not self.is_active:
            return True
        text = (value or "").strip()
        if not text:
            return False
        return any(name.lower() == text.lower() for name in self.checked_names)

    def matches_containing_part(self, value: str | None) -> bool:
        """Any "/"-separated part contains a checked item."""
        if not self.is_active:
            return True
        parts = split_parts(value)
        if not parts:
            return False
        checked = [name.lower() for name in self.checked_names]
        return any(name in part.lower() for part in parts for name in checked)

    def matches_any_value(self, values: Iterable[str]) -> bool:
        """Any of the given values contains a checked item."""
        if not self.is_active:
            return True
        values = [v for v in values if v]
        if not values:
            return False
        checked = [name.lower() for name in self.checked_names]
        return any(name in value.lower() for value in values for name in checked)


def sort_costs(costs: Iterable[str]) -> list[str]:
    """Numeric costs in numeric order, then everything else lexically."""

    def key(cost: str) -> tuple[int, str]:
        try:
            return int(cost), cost
        except ValueError:
            return 2**31 - 1, cost

    return sorted(costs, key=key)


def distinct_case_insensitive(values: Iterable[str]) -> list[str]:
    seen: dict[str, str] = {}
    for value in values:
        if value and value.lower() not in seen:
            seen[value.lower()] = value
    return sorted(seen.values(), key=str.lower)
