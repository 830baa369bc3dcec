"""Comparator policy over record scores.

Two fixed total orders are supported. The order is chosen once per run and
applied through ``sort()``, which relies on Python's stable sort so that
equal scores keep their arrival order and ties resolve the same way every
time within a run.
"""

from __future__ import annotations

import enum
from typing import TYPE_CHECKING

from stream_select.exceptions import InvalidConfigurationError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stream_select.types import Record

# Accepted spellings, including the 0/1 codes of the command-line flag.
_ALIASES: dict[str, str] = {
    "descending": "descending",
    "desc": "descending",
    "0": "descending",
    "ascending": "ascending",
    "asc": "ascending",
    "1": "ascending",
}


class SortOrder(str, enum.Enum):
    """Ordering of records by score."""

    ASCENDING = "ascending"
    DESCENDING = "descending"

    @classmethod
    def parse(cls, value: str | int | SortOrder) -> SortOrder:
        """Resolve a user-supplied order name.

        Args:
            value: A ``SortOrder``, its name, a short alias (``asc``,
                ``desc``) or the numeric code ``0`` (descending) / ``1``
                (ascending).

        Returns:
            The matching SortOrder.

        Raises:
            InvalidConfigurationError: If *value* names no known order.
        """
        if isinstance(value, SortOrder):
            return value
        canonical = _ALIASES.get(str(value).strip().lower())
        if canonical is None:
            raise InvalidConfigurationError(
                f"Unknown sort order: {value!r}. Expected 'ascending' or 'descending'"
            )
        return cls(canonical)

    @property
    def reverse(self) -> bool:
        """Whether ``sorted(..., reverse=...)`` must be set for this order."""
        return self is SortOrder.DESCENDING

    def sort(self, records: Iterable[Record]) -> list[Record]:
        """Return *records* as a new list, best first."""
        return sorted(records, key=_score, reverse=self.reverse)


def _score(record: Record) -> int:
    return record.score
