"""
Hareket dogrulama kurallari.

Taslaklar ve duzeltmeler deftere yazilmadan once buradan gecer.
Tum metin kodlari (lot, kaynak/hedef) bosluklardan temizlenip
buyuk harfe cevrilir; karsilastirma ve saklama bu haliyle yapilir.
"""

import logging
from typing import Any, Sequence

from medistock.catalog import (
    MovementKind,
    PRUEBAS_SUBTYPES,
    SUBTYPED_MATERIAL,
    carries_subtype,
)
from medistock.exceptions import InsufficientStockError, ValidationError
from medistock.schemas.movement import MovementCreate, MovementRecord, MovementUpdate
from medistock.services.projector import StockSnapshot

logger = logging.getLogger(__name__)


def schema_error(errors: Sequence[dict]) -> ValidationError:
    """
    Pydantic / FastAPI hata listesini tek bir ValidationError'a cevir.
    Ilk hata mesaji kullanilir; field, hatanin konumundaki ilk alan adidir
    ("body" / "query" / "path" on ekleri atlanir).
    """
    first = errors[0] if errors else {}
    loc = [str(part) for part in first.get("loc", ()) if part not in ("body", "query", "path")]
    field = loc[0] if loc else None
    message = first.get("msg", "Gecersiz girdi.")
    if field:
        message = f"Gecersiz deger ({field}): {message}"
    return ValidationError(
        message,
        field=field,
        errors=[
            {"loc": [str(part) for part in e.get("loc", ())], "msg": e.get("msg", "")}
            for e in errors
        ],
    )


def normalize_code(value: str | None) -> str:
    """'  a12 ' -> 'A12'. None bos string olur."""
    return (value or "").strip().upper()


def parse_quantity(value: Any) -> int:
    """
    Miktari pozitif tam sayiya cevir.
    Kabul edilen: int veya sadece rakam iceren string ("12", " 12 ").
    Ondalikli, sayisal olmayan veya <= 0 degerler reddedilir.
    """
    if isinstance(value, bool):
        raise ValidationError("Miktar bir tam sayi olmali.", field="quantity")

    if isinstance(value, int):
        qty = value
    elif isinstance(value, str):
        text = value.strip()
        # "+5", "1_000" gibi int()'in kabul ettigi yazimlar reddedilir
        if not (text.isascii() and text.isdigit()):
            raise ValidationError(
                f"Gecersiz miktar: '{value}'. Miktar bir tam sayi olmali.",
                field="quantity",
            )
        qty = int(text)
    else:
        raise ValidationError("Miktar bir tam sayi olmali.", field="quantity")

    if qty <= 0:
        raise ValidationError("Miktar 0'dan buyuk olmali.", field="quantity")
    return qty


def clean_material(value: str | None) -> str:
    material = (value or "").strip()
    if not material:
        raise ValidationError("Malzeme zorunludur.", field="material")
    return material


def clean_lot(value: str | None) -> str:
    lot = normalize_code(value)
    if not lot:
        raise ValidationError("Lot zorunludur.", field="lot")
    return lot


def clean_counterparty(value: str | None, kind: MovementKind) -> str:
    counterparty = normalize_code(value)
    if not counterparty:
        if kind == MovementKind.IN:
            raise ValidationError("Kaynak (procedencia) zorunludur.", field="counterparty")
        raise ValidationError("Hedef (destino) zorunludur.", field="counterparty")
    return counterparty


def clean_notes(value: str | None) -> str | None:
    notes = (value or "").strip()
    return notes or None


def resolve_subtype(material: str, subtype: str | None) -> str | None:
    """
    Alt tip kurali:
    - Alt tip tasiyan malzemede zorunlu; verilmezse ilk katalog alt tipi atanir.
    - Diger malzemelerde alt tip olamaz (bos string yok sayilir).
    """
    subtype = (subtype or "").strip() or None

    if carries_subtype(material):
        if subtype is None:
            return PRUEBAS_SUBTYPES[0]
        if subtype not in PRUEBAS_SUBTYPES:
            raise ValidationError(
                f"Gecersiz alt tip: '{subtype}'. Gecerli alt tipler: {', '.join(PRUEBAS_SUBTYPES)}",
                field="subtype",
            )
        return subtype

    if subtype is not None:
        raise ValidationError(
            f"Alt tip sadece '{SUBTYPED_MATERIAL}' icin girilebilir.",
            field="subtype",
        )
    return None


def check_availability(
    snapshot: StockSnapshot, material: str, subtype: str | None, lot: str, quantity: int
) -> None:
    """
    Cikis icin stok yeterliligini kontrol et.
    Her zaman filtresiz lookup kullanilir: tam sifira inen bir lot
    "bulunamadi" sayilmamali.
    """
    available = snapshot.available(material, subtype, lot)
    if quantity > available:
        logger.warning(
            "Yetersiz stok: %s / %s / %s mevcut=%d istenen=%d",
            material, subtype or "NA", lot, available, quantity,
        )
        raise InsufficientStockError(lot=lot, available=available, requested=quantity)


def validate_draft(draft: MovementCreate, snapshot: StockSnapshot) -> dict:
    """
    Yeni hareket taslagini dogrula ve normalize edilmis alanlari dondur.
    snapshot, bu ekleme ONCESI defterden hesaplanmis olmali.
    Dondurur: MovementRecord alanlari (id, timestamp ve movement_date haric)
    """
    material = clean_material(draft.material)
    subtype = resolve_subtype(material, draft.subtype)
    lot = clean_lot(draft.lot)
    counterparty = clean_counterparty(draft.counterparty, draft.kind)
    quantity = parse_quantity(draft.quantity)

    if draft.kind == MovementKind.OUT:
        check_availability(snapshot, material, subtype, lot, quantity)

    return {
        "kind": draft.kind,
        "material": material,
        "subtype": subtype,
        "lot": lot,
        "quantity": quantity,
        "counterparty": counterparty,
        "notes": clean_notes(draft.notes),
    }


def validate_patch(record: MovementRecord, patch: MovementUpdate) -> dict:
    """
    Duzeltme alanlarini normalize et.
    Stok yeterliligi tekrar kontrol EDILMEZ; duzeltme bir kovayi
    negatife dusurebilir.
    Dondurur: sadece degisecek alanlar
    """
    fields = patch.model_dump(exclude_unset=True)
    updates = {}

    if "material" in fields or "subtype" in fields:
        material = clean_material(fields["material"]) if "material" in fields else record.material
        if "subtype" in fields:
            raw_subtype = fields["subtype"]
        else:
            # Malzeme degistiyse eski alt tip yeni malzemeye tasinmaz
            raw_subtype = record.subtype if carries_subtype(material) else None
        updates["material"] = material
        updates["subtype"] = resolve_subtype(material, raw_subtype)

    if "lot" in fields:
        updates["lot"] = clean_lot(fields["lot"])
    if "quantity" in fields:
        updates["quantity"] = parse_quantity(fields["quantity"])
    if "counterparty" in fields:
        updates["counterparty"] = clean_counterparty(fields["counterparty"], record.kind)
    if "notes" in fields:
        updates["notes"] = clean_notes(fields["notes"])
    if "movement_date" in fields:
        if fields["movement_date"] is None:
            raise ValidationError("Tarih bos olamaz.", field="movement_date")
        updates["movement_date"] = fields["movement_date"]

    return updates
