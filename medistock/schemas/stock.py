from datetime import datetime

from pydantic import BaseModel, ConfigDict

from medistock.schemas.movement import MovementRecord


class StockBucket(BaseModel):
    """
    Hesaplanan stok pozisyonu: malzeme + alt tip + lot.
    Kalici degildir, her degisiklikte hareket defterinden yeniden uretilir.
    """
    id: str
    material: str
    subtype: str | None = None
    lot: str
    quantity: int
    last_updated: datetime

    model_config = ConfigDict(frozen=True)


class AvailabilityResponse(BaseModel):
    """Filtresiz stok sorgusu (sifir ve negatif dahil)."""
    material: str
    subtype: str | None
    lot: str
    available: int


class MaterialStock(BaseModel):
    name: str
    quantity: int


class DashboardResponse(BaseModel):
    total_stock: int
    total_movements: int
    low_stock_count: int
    low_stock_threshold: int
    lowest_materials: list[MaterialStock]
    recent_movements: list[MovementRecord]
    selected_material: str
    material_history: list[MovementRecord]


class CatalogResponse(BaseModel):
    materials: list[str]
    subtyped_material: str
    subtypes: list[str]
