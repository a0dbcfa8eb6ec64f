"""
Urun REST API Router'i (dogrudan miktar varyanti).

Hareket defterinden ayri calisir: urun miktari hareket yazilirken
dogrudan guncellenir.

Endpoint'ler:
    GET    /                          -> Urun listesi (sayfalama + arama)
    GET    /summary                   -> Stok ozeti
    GET    /low-stock                 -> Minimum stogun altindaki urunler
    GET    /{product_id}              -> Urun detay
    POST   /                          -> Yeni urun olustur
    GET    /{product_id}/movements    -> Urunun stok hareketleri
    POST   /{product_id}/movements    -> Stok hareketi ekle (miktari gunceller)

Bu router main.py'de su sekilde eklenir:
    app.include_router(products_api.router, prefix="/api/v1/products", tags=["Urunler"])
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from medistock.config import settings
from medistock.dependencies import get_db
from medistock.rate_limit import limiter
from medistock.schemas.product import (
    ProductCreate,
    ProductMovementCreate,
    ProductMovementResponse,
    ProductResponse,
    ProductStockSummary,
)
from medistock.services import product_stock as product_service

router = APIRouter()


class ProductListResponse(BaseModel):
    """
    Urun listesi response modeli.
    Sayfalama bilgisi ile birlikte urunleri dondurur.
    """
    items: list[ProductResponse]
    total: int
    page: int
    size: int


@router.get("", response_model=ProductListResponse)
def list_products(
    db: Annotated[Session, Depends(get_db)],
    page: int = Query(default=1, ge=1, description="Sayfa numarasi"),
    size: int = Query(default=20, ge=1, le=100, description="Sayfa basi kayit sayisi"),
    search: str | None = Query(default=None, description="Urun adi veya SKU icinde arama"),
):
    products, total = product_service.get_products(db=db, search=search, page=page, size=size)
    return ProductListResponse(items=products, total=total, page=page, size=size)


@router.get("/summary", response_model=ProductStockSummary)
def stock_summary(db: Annotated[Session, Depends(get_db)]):
    return product_service.get_stock_summary(db)


@router.get("/low-stock", response_model=list[ProductResponse])
def low_stock_products(db: Annotated[Session, Depends(get_db)]):
    return product_service.get_low_stock_products(db)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    return product_service.get_product(db=db, product_id=product_id)


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_WRITE)
def create_product(
    request: Request,
    data: ProductCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """Yeni urun olusturur. SKU buyuk harfe cevrilir ve benzersiz olmalidir."""
    return product_service.create_product(db=db, data=data)


@router.get("/{product_id}/movements", response_model=list[ProductMovementResponse])
def list_product_movements(
    product_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=500),
):
    product_service.get_product(db=db, product_id=product_id)
    return product_service.get_product_movements(
        db=db, product_id=product_id, skip=skip, limit=limit,
    )


@router.post(
    "/{product_id}/movements",
    response_model=ProductMovementResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.RATE_LIMIT_WRITE)
def add_product_movement(
    request: Request,
    product_id: uuid.UUID,
    data: ProductMovementCreate,
    db: Annotated[Session, Depends(get_db)],
):
    """
    Stok hareketi ekler ve urun miktarini ayni islemde gunceller.
    OUT miktari mevcut stogu asarsa 400 doner.
    """
    return product_service.add_product_movement(db=db, product_id=product_id, data=data)
