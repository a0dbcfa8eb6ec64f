import uuid
from datetime import datetime

from pydantic import BaseModel, Field, ConfigDict

from medistock.catalog import MovementKind


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    category: str = "General"
    sku: str = Field(min_length=1, max_length=64)
    quantity: int = Field(default=0, ge=0)
    min_stock: int = Field(default=0, ge=0)
    unit: str = "pza"


class ProductResponse(BaseModel):
    id: uuid.UUID
    name: str
    category: str
    sku: str
    quantity: int
    min_stock: int
    unit: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductMovementCreate(BaseModel):
    """
    Urun stok hareketi olusturma schemasi.
    quantity her zaman pozitif olmali; yonu kind belirler.
    """
    kind: MovementKind
    quantity: int = Field(gt=0, description="Miktar (pozitif tam sayi)")
    movement_date: datetime | None = None
    notes: str | None = None


class ProductMovementResponse(BaseModel):
    id: uuid.UUID
    product_id: uuid.UUID
    product_name: str
    kind: MovementKind
    quantity: int
    movement_date: datetime
    notes: str | None
    previous_quantity: int
    new_quantity: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductStockSummary(BaseModel):
    total_products: int
    in_stock: int
    low_stock: int
    out_of_stock: int
