# 📄 File: marketplace/modules/user_management/domain/models/page.py
# 🧭 Purpose (Layman Explanation):
# Describes "give me page 3, 20 per page" requests and the page of results that comes back,
# including how many results exist in total.
# 🧪 Purpose (Technical Summary):
# Zero-based page request and generic page container with derived paging metadata.
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# user_repository.py (find_all, find_by_search_term), user_service.py, user_dto.py

from math import ceil
from typing import Callable, Generic, List, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class PageRequest(BaseModel):
    """Zero-based page number and page size."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)

    @property
    def offset(self) -> int:
        return self.page * self.size


class Page(BaseModel, Generic[T]):
    """One page of results plus the total number of matches."""

    content: List[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0

    @classmethod
    def of(cls, content: List[T], total: int, request: PageRequest) -> "Page[T]":
        return cls(content=content, total=total, page=request.page, size=request.size)

    def map(self, mapper: Callable[[T], R]) -> "Page[R]":
        return Page(content=[mapper(item) for item in self.content], total=self.total, page=self.page, size=self.size)
