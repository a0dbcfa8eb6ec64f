"""
Hareket REST API Router'i.

Hareket defterine ekleme, duzeltme, rapor filtreleme ve
Excel/CSV disa aktarma islemlerini saglar.

Endpoint'ler:
    GET    /               -> Hareket raporu (arama + malzeme + tip + tarih araligi)
    GET    /export         -> Filtrelenmis raporu Excel veya CSV olarak indir
    GET    /{movement_id}  -> Hareket detay
    POST   /               -> Yeni hareket (giris/cikis)
    PATCH  /{movement_id}  -> Hareket duzelt (partial update)

Bu router main.py'de su sekilde eklenir:
    app.include_router(movements_api.router, prefix="/api/v1/movements", tags=["Hareketler"])
"""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import Response, StreamingResponse

from medistock.config import settings
from medistock.dependencies import get_movement_log
from medistock.rate_limit import limiter
from medistock.schemas.movement import MovementCreate, MovementRecord, MovementUpdate
from medistock.services import report as report_service
from medistock.services.movement_log import MovementLog

router = APIRouter()


def _filtered(
    log: MovementLog,
    search: str | None,
    material: str,
    kind: str,
    start_date: date | None,
    end_date: date | None,
) -> list[MovementRecord]:
    return report_service.filter_movements(
        log.movements(),
        search=search,
        material=material,
        kind=kind,
        start_date=start_date,
        end_date=end_date,
    )


@router.get("", response_model=list[MovementRecord])
def list_movements(
    log: Annotated[MovementLog, Depends(get_movement_log)],
    search: str | None = Query(default=None, description="Lot veya kaynak/hedef icinde arama"),
    material: str = Query(default=report_service.ALL),
    kind: str = Query(default=report_service.ALL, pattern="^(ALL|IN|OUT)$"),
    start_date: date | None = Query(default=None, description="Baslangic (dahil)"),
    end_date: date | None = Query(default=None, description="Bitis (dahil)"),
):
    """
    Hareket raporunu dondurur, en yeni kayit once.

    Ornek:
        GET /api/v1/movements?kind=OUT&start_date=2026-01-01&end_date=2026-01-31
    """
    return _filtered(log, search, material, kind, start_date, end_date)


@router.get("/export")
def export_movements(
    log: Annotated[MovementLog, Depends(get_movement_log)],
    format: str = Query(default="excel", pattern="^(excel|csv)$"),
    search: str | None = Query(default=None),
    material: str = Query(default=report_service.ALL),
    kind: str = Query(default=report_service.ALL, pattern="^(ALL|IN|OUT)$"),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
):
    """Rapor filtreleriyle eslesen hareketleri Excel veya CSV olarak indir."""
    movements = _filtered(log, search, material, kind, start_date, end_date)
    filename = settings.EXPORT_FILENAME

    if format == "excel":
        buffer = report_service.export_excel(movements)
        return StreamingResponse(
            buffer,
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            headers={"Content-Disposition": f'attachment; filename="{filename}.xlsx"'},
        )

    return Response(
        content=report_service.export_csv(movements).encode("utf-8"),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}.csv"'},
    )


@router.get("/{movement_id}", response_model=MovementRecord)
def get_movement(
    movement_id: str,
    log: Annotated[MovementLog, Depends(get_movement_log)],
):
    """Tek bir hareketi getir. Bulunamazsa 404 doner."""
    return log.get(movement_id)


@router.post("", response_model=MovementRecord, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_WRITE)
def create_movement(
    request: Request,
    data: MovementCreate,
    log: Annotated[MovementLog, Depends(get_movement_log)],
):
    """
    Yeni giris (IN) veya cikis (OUT) hareketi kaydeder.

    - lot ve counterparty buyuk harfe cevrilir, bos olamaz
    - quantity pozitif tam sayi olmali ("12" gibi string de kabul edilir)
    - OUT icin lottaki mevcut stok yetersizse 400 doner (eksik miktar mesajda)
    """
    return log.append(data)


@router.patch("/{movement_id}", response_model=MovementRecord)
@limiter.limit(settings.RATE_LIMIT_WRITE)
def amend_movement(
    request: Request,
    movement_id: str,
    data: MovementUpdate,
    log: Annotated[MovementLog, Depends(get_movement_log)],
):
    """
    Mevcut hareketi duzeltir (partial update).

    Sadece gonderilen alanlar degisir. Stok yeterliligi tekrar kontrol
    edilmez: duzeltme sonucu bir lot negatife dusebilir.
    """
    return log.amend(movement_id, data)
