from datetime import datetime
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


InventoryEventType = Literal["add", "remove"]


def _strip_nullable(v: Optional[str]) -> Optional[str]:
    if v is None:
        return None
    v = v.strip()
    return v or None


class ItemCreate(BaseModel):
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    restock_point: int = Field(10, ge=0)

    @field_validator("name")
    @classmethod
    def _strip_required(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("field is required")
        return v

    @field_validator("description", "image_url")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _strip_nullable(v)


class ItemUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    restock_point: Optional[int] = Field(None, ge=0)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty")
        return v

    @field_validator("description", "image_url")
    @classmethod
    def _strip_optional(cls, v: Optional[str]) -> Optional[str]:
        return _strip_nullable(v)


class ItemOut(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    current_units: int
    restock_point: int
    deleted: bool
    needs_restock: bool
    path: str
    url: str


class StockAdjustmentCreate(BaseModel):
    units: int = Field(..., gt=0)
    type: InventoryEventType


class InventoryEventOut(BaseModel):
    id: int
    item_id: UUID
    units: int
    type: InventoryEventType
    created_at: datetime

    class Config:
        from_attributes = True


class StockAdjustmentOut(BaseModel):
    item: ItemOut
    event: InventoryEventOut


class StockPointOut(BaseModel):
    date: datetime
    units: int


class ItemHistoryOut(BaseModel):
    item_id: UUID
    name: str
    restock_point: int
    current_units: int
    events: List[InventoryEventOut]
    points: List[StockPointOut]


class ScanRequest(BaseModel):
    payload: str


class ScanResult(BaseModel):
    matched: bool
    item_id: Optional[UUID] = None
    path: Optional[str] = None
