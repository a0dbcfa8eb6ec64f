import logging

from medistock.catalog import MATERIALS_LIST
from medistock.config import settings
from medistock.schemas.movement import MovementRecord
from medistock.schemas.stock import DashboardResponse, MaterialStock, StockBucket
from medistock.services.projector import StockSnapshot

logger = logging.getLogger(__name__)


def search_stock(snapshot: StockSnapshot, search: str | None = None) -> list[StockBucket]:
    """
    Listelenen (quantity > 0) kovalari arama terimine gore filtrele.
    Malzeme, alt tip ve lot icinde buyuk/kucuk harf duyarsiz arar.
    """
    if not search:
        return list(snapshot.buckets)

    term = search.strip().upper()
    return [
        bucket for bucket in snapshot.buckets
        if term in bucket.material.upper()
        or term in bucket.lot
        or (bucket.subtype and term in bucket.subtype.upper())
    ]


def get_low_stock_buckets(
    snapshot: StockSnapshot, threshold: int | None = None,
) -> list[StockBucket]:
    """
    Miktari esik degerinin altinda olan kovalari getir.
    Stoku bitmis kovalar listelenmedigi icin dahil edilmez.
    Miktara gore artan sirada siralanir.
    """
    threshold = settings.LOW_STOCK_THRESHOLD if threshold is None else threshold
    return sorted(
        (b for b in snapshot.buckets if b.quantity < threshold),
        key=lambda b: b.quantity,
    )


def aggregate_by_material(snapshot: StockSnapshot, limit: int = 5) -> list[MaterialStock]:
    """
    Lotlari yok sayarak katalog malzemesi bazinda toplam stok.
    Hic stogu olmayan katalog malzemeleri 0 ile gorunur.
    En dusuk stoklu `limit` malzeme dondurulur.
    """
    totals = {material: 0 for material in MATERIALS_LIST}
    for bucket in snapshot.buckets:
        # Katalog disi (serbest metin) malzemeler bu grafikte yer almaz
        if bucket.material in totals:
            totals[bucket.material] += bucket.quantity

    ranked = sorted(totals.items(), key=lambda item: item[1])
    return [MaterialStock(name=name, quantity=qty) for name, qty in ranked[:limit]]


def newest_first(movements: list[MovementRecord]) -> list[MovementRecord]:
    return sorted(movements, key=lambda m: m.timestamp, reverse=True)


def get_dashboard_summary(
    snapshot: StockSnapshot,
    movements: list[MovementRecord],
    material: str | None = None,
    recent_limit: int = 10,
) -> DashboardResponse:
    """
    Dashboard ozet bilgilerini dondur:
    - total_stock: listelenen tum kovalardaki toplam miktar
    - total_movements: defterdeki hareket sayisi
    - low_stock_count: esik altindaki kova sayisi
    - lowest_materials: en dusuk stoklu 5 katalog malzemesi
    - recent_movements: son hareketler (en yeni once)
    - material_history: secilen malzemenin tum hareketleri
    """
    threshold = settings.LOW_STOCK_THRESHOLD
    selected = material or MATERIALS_LIST[0]
    ordered = newest_first(movements)

    return DashboardResponse(
        total_stock=sum(b.quantity for b in snapshot.buckets),
        total_movements=len(movements),
        low_stock_count=len(get_low_stock_buckets(snapshot, threshold)),
        low_stock_threshold=threshold,
        lowest_materials=aggregate_by_material(snapshot),
        recent_movements=ordered[:recent_limit],
        selected_material=selected,
        material_history=[m for m in ordered if m.material == selected],
    )
