"""Pagination value object shared by listing operations."""

from dataclasses import dataclass
from typing import Optional

from ..constants import MAX_INTEGER
from ..exceptions import ValidationError


PAGE_SIZE = 10


@dataclass(frozen=True)
class PageRequest:
    """A 1-indexed page of fixed size.

    ``page=None`` means "no pagination": callers get the whole result set.
    """
    page: Optional[int] = None
    size: int = PAGE_SIZE

    def __post_init__(self) -> None:
        """Validate page number."""
        if self.page is not None and (isinstance(self.page, bool) or not 1 <= self.page <= MAX_INTEGER):
            raise ValidationError(f"Page must be a positive integer no greater than {MAX_INTEGER}")
        if self.size < 1:
            raise ValidationError("Page size must be a positive integer")

    @property
    def is_paginated(self) -> bool:
        return self.page is not None

    @property
    def offset(self) -> int:
        """Number of records to skip."""
        if self.page is None:
            return 0
        return (self.page - 1) * self.size

    @property
    def limit(self) -> Optional[int]:
        """Number of records to take, or None for all of them."""
        return self.size if self.page is not None else None
