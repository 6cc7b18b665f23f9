"""Domain entity for one page of a paged listing."""

import math
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .record import Record

T = TypeVar("T")


@dataclass
class PagedResponse(Generic[T]):
    """A window of records plus the numbers needed to render pagination.

    ``total_count`` is counted independently of the window, so a page past the
    end comes back empty while still reporting the full count.
    """

    total_count: int
    page_number: int
    page_size: int
    records: list[Record[T]] = field(default_factory=list)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size)

    @property
    def is_first_page(self) -> bool:
        return self.page_number == 1

    @property
    def is_last_page(self) -> bool:
        return self.page_number >= self.total_pages

    @property
    def start_index(self) -> int:
        """1-based position of the first record on this page."""
        return (self.page_number - 1) * self.page_size + 1

    @property
    def end_index(self) -> int:
        """1-based position of the last record on this page (0 when empty)."""
        return min(self.start_index + self.page_size - 1, self.total_count)
