# --- File: smart_sac/schemas/common/pagination.py ---
"""
Pagination schemas for page-based listings.
"""

from __future__ import annotations

from pydantic import Field, computed_field

from smart_sac.schemas.common.base import BaseSchema

__all__ = [
    "PaginationParams",
]


class PaginationParams(BaseSchema):
    """Pagination query parameters."""

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-indexed)",
    )
    page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Items per page",
    )

    @computed_field  # type: ignore[misc]
    @property
    def offset(self) -> int:
        """Calculate offset for database queries."""
        return (self.page - 1) * self.page_size

    @computed_field  # type: ignore[misc]
    @property
    def limit(self) -> int:
        """Get limit for database queries."""
        return self.page_size
