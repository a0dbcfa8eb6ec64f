"""
Stok ve dashboard REST API Router'i.

Endpoint'ler:
    GET /catalog          -> Malzeme ve alt tip listesi
    GET /stock            -> Guncel stok (sadece miktari > 0 olan lotlar)
    GET /stock/available  -> Tek bir lotun filtresiz miktari (0 ve negatif dahil)
    GET /stock/low        -> Dusuk stoklu lotlar
    GET /dashboard        -> Dashboard ozeti
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from medistock.catalog import MATERIALS_LIST, PRUEBAS_SUBTYPES, SUBTYPED_MATERIAL
from medistock.dependencies import get_movement_log
from medistock.schemas.stock import (
    AvailabilityResponse,
    CatalogResponse,
    DashboardResponse,
    StockBucket,
)
from medistock.services import stock as stock_service
from medistock.services.movement_log import MovementLog
from medistock.services.validation import clean_material, normalize_code, resolve_subtype

router = APIRouter()


@router.get("/catalog", response_model=CatalogResponse)
def get_catalog():
    return CatalogResponse(
        materials=MATERIALS_LIST,
        subtyped_material=SUBTYPED_MATERIAL,
        subtypes=PRUEBAS_SUBTYPES,
    )


@router.get("/stock", response_model=list[StockBucket])
def list_stock(
    log: Annotated[MovementLog, Depends(get_movement_log)],
    search: str | None = Query(default=None, description="Malzeme, alt tip veya lot icinde arama"),
):
    """Guncel envanter. Miktari sifir veya negatif olan lotlar listelenmez."""
    return stock_service.search_stock(log.snapshot, search)


@router.get("/stock/available", response_model=AvailabilityResponse)
def get_available(
    log: Annotated[MovementLog, Depends(get_movement_log)],
    material: str = Query(...),
    lot: str = Query(...),
    subtype: str | None = Query(default=None),
):
    """
    Cikis formlari icin filtresiz miktar.
    Hic hareketi olmayan lot icin 0 doner. Gecersiz alt tip 400 doner.
    """
    # Kayit ile ayni kurallar: alt tip tasiyan malzemede varsayilan alt tip atanir
    material = clean_material(material)
    subtype = resolve_subtype(material, subtype)
    lot = normalize_code(lot)
    return AvailabilityResponse(
        material=material,
        subtype=subtype,
        lot=lot,
        available=log.snapshot.available(material, subtype, lot),
    )


@router.get("/stock/low", response_model=list[StockBucket])
def list_low_stock(
    log: Annotated[MovementLog, Depends(get_movement_log)],
    threshold: int | None = Query(default=None, ge=1),
):
    return stock_service.get_low_stock_buckets(log.snapshot, threshold)


@router.get("/dashboard", response_model=DashboardResponse)
def get_dashboard(
    log: Annotated[MovementLog, Depends(get_movement_log)],
    material: str | None = Query(default=None, description="Gecmisi gosterilecek malzeme"),
):
    return stock_service.get_dashboard_summary(log.snapshot, log.movements(), material)
