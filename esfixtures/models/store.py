"""
Results returned by document store calls.
"""
from pydantic import BaseModel, ConfigDict, Field


class BulkItemResult(BaseModel):
    """Outcome of one record in a bulk write."""
    model_config = ConfigDict(frozen=True)

    position: int  # index of the record in the submitted batch
    record_id: str = ""
    status: int | None = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


class BulkResult(BaseModel):
    """All item outcomes of a bulk write plus the store's failure count."""
    model_config = ConfigDict(frozen=True)

    items: tuple[BulkItemResult, ...] = ()
    num_failed: int = Field(default=0, ge=0)

    @property
    def failures(self) -> list[str]:
        return [item.error for item in self.items if item.error is not None]

    @property
    def succeeded(self) -> bool:
        return not self.failures and self.num_failed == 0
