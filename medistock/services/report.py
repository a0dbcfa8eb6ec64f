"""
Hareket raporu servisi.
Filtreleme ve Excel/CSV disa aktarma islemlerini yonetir.
"""
import csv
import logging
from datetime import date
from io import BytesIO, StringIO

from medistock.catalog import KIND_LABELS, MovementKind
from medistock.schemas.movement import MovementRecord

logger = logging.getLogger(__name__)

# "Tumu" filtresi
ALL = "ALL"

EXPORT_HEADERS = [
    "ID", "Tarih", "Kayit Zamani", "Tip", "Malzeme", "Alt Tip",
    "Lot", "Miktar", "Kaynak / Hedef", "Notlar",
]


def filter_movements(
    movements: list[MovementRecord],
    search: str | None = None,
    material: str = ALL,
    kind: str = ALL,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[MovementRecord]:
    """
    Hareketleri rapor filtrelerine gore suz.
    - search: lot veya kaynak/hedef icinde arar (kodlar buyuk harfle saklanir)
    - material / kind: "ALL" ise filtre uygulanmaz
    - start_date / end_date: is tarihine gore, iki uc dahil (tam gun)
    En yeniden en eskiye (timestamp) siralanir.
    """
    term = (search or "").strip().upper()
    result = []

    for m in movements:
        if term and term not in m.lot and term not in m.counterparty:
            continue
        if material != ALL and m.material != material:
            continue
        if kind != ALL and m.kind.value != kind:
            continue

        day = m.movement_date.date()
        if start_date and day < start_date:
            continue
        if end_date and day > end_date:
            continue

        result.append(m)

    return sorted(result, key=lambda m: m.timestamp, reverse=True)


def _export_row(m: MovementRecord) -> list:
    """Her hareket alani tam olarak bir kolonda yer alir."""
    return [
        m.id,
        m.movement_date.strftime("%d.%m.%Y %H:%M"),
        m.timestamp.strftime("%d.%m.%Y %H:%M:%S"),
        KIND_LABELS[MovementKind(m.kind)],
        m.material,
        m.subtype or "N/A",
        m.lot,
        m.quantity,
        m.counterparty,
        m.notes or "",
    ]


def export_excel(movements: list[MovementRecord], sheet_title: str = "Hareket Raporu") -> BytesIO:
    """Hareket listesini xlsx olarak hazirla. Dondurur: basa sarilmis BytesIO."""
    from openpyxl import Workbook

    wb = Workbook()
    ws = wb.active
    ws.title = sheet_title
    ws.append(EXPORT_HEADERS)
    for m in movements:
        ws.append(_export_row(m))
    # Baslik satiri kaydirmada sabit kalsin
    ws.freeze_panes = "A2"

    buffer = BytesIO()
    wb.save(buffer)
    buffer.seek(0)

    logger.info("Excel raporu olusturuldu: %d hareket", len(movements))
    return buffer


def export_csv(movements: list[MovementRecord]) -> str:
    output = StringIO()
    writer = csv.writer(output)
    writer.writerow(EXPORT_HEADERS)
    for m in movements:
        writer.writerow(_export_row(m))
    return output.getvalue()
