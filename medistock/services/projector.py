"""
Stok hesaplayici.

Hareket defterini bastan sona yeniden oynatarak (replay) her
(malzeme, alt tip, lot) kovasinin guncel miktarini hesaplar.
Saf fonksiyondur: girdiyi degistirmez, ayni defter icin her zaman
ayni sonucu uretir.
"""

from typing import Iterable, NamedTuple

from medistock.catalog import MovementKind
from medistock.schemas.movement import MovementRecord
from medistock.schemas.stock import StockBucket


class BucketKey(NamedTuple):
    material: str
    subtype: str | None
    lot: str


class StockSnapshot(NamedTuple):
    """
    buckets: sadece quantity > 0 olan kovalar (listeleme icin)
    lookup: tum kovalar, sifir ve negatif dahil (dogrulama icin)
    """
    buckets: list[StockBucket]
    lookup: dict[BucketKey, int]

    def available(self, material: str, subtype: str | None, lot: str) -> int:
        # Hic hareketi olmayan kova 0 kabul edilir
        return self.lookup.get(bucket_key(material, subtype, lot), 0)


def bucket_key(material: str, subtype: str | None, lot: str) -> BucketKey:
    # Bos alt tip ile None ayni kovayi gosterir
    return BucketKey(material, subtype or None, lot)


def bucket_id(key: BucketKey) -> str:
    """Gosterim anahtari, ornek: 'Laminillas-NA-A12345'."""
    return f"{key.material}-{key.subtype or 'NA'}-{key.lot}"


def project(movements: Iterable[MovementRecord]) -> StockSnapshot:
    """
    Hareketleri timestamp'e gore artan sirada oynatip stok kovalarini hesapla.

    - sorted() kararlidir: ayni timestamp'li hareketler girdi sirasini korur.
    - IN miktari ekler, OUT cikarir; sonuc sifirin altina inebilir (kirpilmaz).
    - last_updated her zaman kovaya dokunan son hareketin is tarihidir.
    """
    ordered = sorted(movements, key=lambda m: m.timestamp)

    totals: dict[BucketKey, int] = {}
    last_dates = {}

    for movement in ordered:
        key = bucket_key(movement.material, movement.subtype, movement.lot)
        delta = movement.quantity if movement.kind == MovementKind.IN else -movement.quantity
        totals[key] = totals.get(key, 0) + delta
        last_dates[key] = movement.movement_date

    buckets = [
        StockBucket(
            id=bucket_id(key),
            material=key.material,
            subtype=key.subtype,
            lot=key.lot,
            quantity=quantity,
            last_updated=last_dates[key],
        )
        for key, quantity in totals.items()
        if quantity > 0
    ]

    return StockSnapshot(buckets=buckets, lookup=dict(totals))
