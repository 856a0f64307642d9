"""
Pydantic schemas for API request/response validation.

These schemas define the contract with API clients.
All monetary values are strings to avoid floating point issues, and
JSON field names follow the camelCase receipt format.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Request Schemas
# =============================================================================

class ItemSubmission(BaseModel):
    """One line item as submitted by the client."""
    model_config = ConfigDict(populate_by_name=True)

    short_description: Any = Field(
        default=None,
        alias="shortDescription",
        description="Free-text item description",
    )
    price: Any = Field(
        default=None,
        description="Item price as a decimal string, e.g. \"6.49\"",
    )


class ReceiptSubmission(BaseModel):
    """
    Receipt as submitted by the client.

    Fields are optional and loosely typed at this layer so that missing or
    wrongly typed values are reported together by the receipt validator
    instead of failing the whole request on the first one.
    """
    model_config = ConfigDict(populate_by_name=True)

    retailer: Any = Field(default=None, description="Retailer name")
    purchase_date: Any = Field(
        default=None,
        alias="purchaseDate",
        description="Purchase date as YYYY-MM-DD",
    )
    purchase_time: Any = Field(
        default=None,
        alias="purchaseTime",
        description="Purchase time as HH:MM (24h)",
    )
    # Falls back to the raw value when any entry is not an object
    items: Union[list[ItemSubmission], Any] = Field(default=None, union_mode="left_to_right")
    total: Any = Field(
        default=None,
        description="Receipt total as a decimal string",
    )

    def to_raw(self) -> dict[str, Any]:
        """Payload in the submitted JSON shape, as the validator expects it."""
        raw = self.model_dump(by_alias=True, exclude={"items"})
        items = self.items
        if isinstance(items, list):
            items = [
                item.model_dump(by_alias=True) if isinstance(item, ItemSubmission) else item
                for item in items
            ]
        raw["items"] = items
        return raw


# =============================================================================
# Response Schemas
# =============================================================================

class ItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    short_description: str = Field(alias="shortDescription")
    price: str


class ReceiptResponse(BaseModel):
    """A scored receipt."""
    model_config = ConfigDict(populate_by_name=True)

    retailer: str
    purchase_date: str = Field(alias="purchaseDate")
    purchase_time: str = Field(alias="purchaseTime")
    items: list[ItemResponse]
    total: str
    points: int


class ProcessReceiptResponse(BaseModel):
    """Response from receipt submission."""
    id: str
    receipt: ReceiptResponse


class PointsResponse(BaseModel):
    """Points awarded to a stored receipt."""
    points: int


class DatabaseDumpResponse(BaseModel):
    """Every stored receipt keyed by identifier."""
    database: dict[str, ReceiptResponse]


class FailureResponse(BaseModel):
    """Single validation failure."""
    code: str
    field: str
    message: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    store: str


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    detail: str | None = None
    failures: list[FailureResponse] = []
    id: str | None = None
