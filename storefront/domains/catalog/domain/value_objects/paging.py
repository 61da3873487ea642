"""
Paged list value object.

A single, already materialized page of a larger result set.
"""

import math
from dataclasses import dataclass, field
from typing import Generic, Iterator, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PagedList(Generic[T]):
    """One page of results plus the paging metadata needed to navigate."""

    items: list[T] = field(default_factory=list)
    page_number: int = 1
    page_size: int = 20
    total_count: int = 0

    def __post_init__(self):
        if self.page_number < 1:
            raise ValueError("page_number must be >= 1")
        if self.page_size < 1:
            raise ValueError("page_size must be >= 1")

    def __iter__(self) -> Iterator[T]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> T:
        return self.items[index]

    @property
    def page_count(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.total_count else 0

    @property
    def has_next_page(self) -> bool:
        return self.page_number < self.page_count

    @property
    def has_previous_page(self) -> bool:
        return self.page_number > 1

    @classmethod
    def from_superset(cls, superset: list[T], page_number: int, page_size: int) -> "PagedList[T]":
        """Slice a full result set into the requested page."""
        start = (page_number - 1) * page_size
        return cls(
            items=superset[start : start + page_size],
            page_number=page_number,
            page_size=page_size,
            total_count=len(superset),
        )

    @classmethod
    def empty(cls, page_size: int = 20) -> "PagedList[T]":
        return cls(items=[], page_number=1, page_size=page_size, total_count=0)
