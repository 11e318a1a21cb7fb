"""Shared type definitions across the application."""

from typing import List, Optional
from pydantic import BaseModel, Field


class CreatedProduct(BaseModel):
    """A temporary product freshly created to carry a customer image."""
    product_id: int
    variant_id: Optional[int] = None
    sku: str
    file_url: str


class DeletionFailure(BaseModel):
    """A product that could not be deleted during cleanup."""
    product_id: int
    error: str


class CleanupReport(BaseModel):
    """Outcome of a cleanup batch, partitioned into succeeded and failed."""
    deleted: List[int] = Field(default_factory=list)
    failed: List[DeletionFailure] = Field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def attempted_count(self) -> int:
        return len(self.deleted) + len(self.failed)
