"""Selection and pagination cursors for the three list panels.

Both cursors wrap around, but not proportionally: an oversized forward jump
always lands on the first item, and stepping back from the first item lands
on the last one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

FIRST_PAGE = 1


class SelectionCursor(Generic[T]):
    """Ordered items plus an optional selected index.

    A cursor is never re-pointed at a new list: replacing the backing items
    means building a new cursor, which starts with nothing selected.
    """

    def __init__(self, items: Iterable[T] = ()) -> None:
        self.items: tuple[T, ...] = tuple(items)
        self.selected: int | None = None

    def __len__(self) -> int:
        return len(self.items)

    def advance_by(self, steps: int) -> int | None:
        """Move the selection by ``steps`` and return the new index.

        The first advance always selects index 0. Moving past the end wraps
        to 0, moving back from 0 wraps to the last item. Empty cursors keep
        nothing selected.
        """
        count = len(self.items)
        if count == 0:
            self.selected = None
            return None
        current = self.selected
        if current is None:
            target = 0
        elif current + steps >= count:
            target = 0
        elif current == 0 and steps < 0:
            target = count - 1
        else:
            target = max(0, current + steps)
        self.selected = target
        return target

    def selected_item(self) -> T | None:
        """Return the selected item, or ``None`` when nothing is selected."""
        if self.selected is None or not self.items:
            return None
        return self.items[self.selected]


@dataclass
class PaginationCursor:
    """Current 1-based page of a board's thread listing."""

    page_count: int
    page: int = FIRST_PAGE

    def __post_init__(self) -> None:
        self.page_count = max(FIRST_PAGE, self.page_count)
        self.page = max(FIRST_PAGE, min(self.page, self.page_count))

    def next_page(self) -> int:
        """Advance one page, wrapping from the last page to the first."""
        if self.page == self.page_count:
            self.page = FIRST_PAGE
        else:
            self.page += 1
        return self.page

    def prev_page(self) -> int:
        """Go back one page, wrapping from the first page to the last."""
        if self.page == FIRST_PAGE:
            self.page = self.page_count
        else:
            self.page -= 1
        return self.page


__all__ = ["FIRST_PAGE", "PaginationCursor", "SelectionCursor"]
