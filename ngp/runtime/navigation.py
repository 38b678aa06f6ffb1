"""Pagination and cursor state machine over the result store.

``offset`` is the index of the first visible row and ``cursor`` the row
within the page. Every public operation expects the caller to hold the
store lock and keeps the selected entry off file markers whenever a match
line exists.
"""

from __future__ import annotations

from ..results import ResultStore


class Navigator:
    def __init__(self, store: ResultStore, page_size: int) -> None:
        self.store = store
        self.page_size = max(1, page_size)
        self.offset = 0
        self.cursor = 0

    def selected_index(self) -> int:
        return self.offset + self.cursor

    def max_offset(self, total: int) -> int:
        """Largest offset whose page still ends on the last entry."""
        remainder = total % self.page_size
        if remainder == 0:
            return max(0, total - self.page_size)
        return total - remainder

    def visible_entries(self) -> list:
        return self.store.entries_between(self.offset, self.offset + self.page_size)

    def cursor_down(self) -> None:
        total = self.store.count()
        if total == 0:
            return
        if self.cursor == self.page_size - 1:
            self.page_down()
            return
        if self.selected_index() < total - 1:
            self.cursor += 1
        if self.store.is_marker_at(self.selected_index()):
            self.cursor += 1
        if self.cursor > self.page_size - 1:
            self.page_down()

    def cursor_up(self) -> None:
        if self.store.count() == 0:
            return
        if self.cursor == 0:
            self.page_up()
            return
        self.cursor -= 1
        if self.store.is_marker_at(self.selected_index()):
            self.cursor -= 1
        if self.cursor < 0:
            self.page_up()

    def page_down(self) -> None:
        total = self.store.count()
        if total == 0:
            return
        max_offset = self.max_offset(total)
        self.offset = min(self.offset + self.page_size, max_offset)
        if self.offset == max_offset:
            self.cursor = (total - 1) % self.page_size
        else:
            self.cursor = 0
        self.settle()

    def page_up(self) -> None:
        if self.store.count() == 0:
            return
        self.offset = max(0, self.offset - self.page_size)
        self.cursor = 0 if self.offset == 0 else self.page_size - 1
        self.settle(backward=True)

    def resize(self, page_size: int) -> None:
        """Apply a new page size, re-anchoring if the cursor fell off the page."""
        self.page_size = max(1, page_size)
        if self.cursor < self.page_size:
            return
        selected = self.selected_index()
        self.offset = selected - (selected % self.page_size)
        self.cursor = selected - self.offset

    def settle(self, backward: bool = False) -> None:
        """Move the selection off a file marker.

        Prefers the next row; falls back to the previous row when the marker
        sits on the last row of the page. A one-row page scrolls instead,
        back onto the previous file when ``backward`` and forward otherwise.
        """
        total = self.store.count()
        if total == 0:
            return
        if self.selected_index() >= total:
            self.cursor = max(0, total - 1 - self.offset)
            if self.selected_index() >= total:
                self.offset = max(0, total - 1)
                self.cursor = 0
        if not self.store.is_marker_at(self.selected_index()):
            return
        if self.selected_index() + 1 >= total:
            return
        if self.cursor + 1 < self.page_size:
            self.cursor += 1
        elif self.cursor > 0:
            self.cursor -= 1
        elif backward and self.offset > 0:
            self.offset -= 1
        else:
            self.offset += 1


__all__ = ["Navigator"]
