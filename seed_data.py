"""Ornek veri ekleme scripti: demo hareketlerini defter uzerinden yazar."""
from datetime import datetime, timedelta, timezone

from medistock.catalog import MovementKind, MaterialType, PruebaSubtype
from medistock.dependencies import create_store
from medistock.exceptions import ValidationError
from medistock.logging_config import setup_logging
from medistock.services.movement_log import MovementLog

setup_logging()

log = MovementLog(create_store())
log.load()

start = datetime.now(timezone.utc) - timedelta(days=30)

movements_data = [
    # (gun, tip, malzeme, alt tip, lot, miktar, kaynak/hedef)
    (0, MovementKind.IN, MaterialType.VIDA_SUERO_ORAL, None, "VSO2401", 200, "Almacen Central"),
    (1, MovementKind.IN, MaterialType.LAMINILLAS, None, "LAM-88", 500, "Almacen Central"),
    (2, MovementKind.IN, MaterialType.PRUEBAS_RAPIDAS, PruebaSubtype.HEPATITIS_B, "HB-001", 100, "Jurisdiccion"),
    (2, MovementKind.IN, MaterialType.PRUEBAS_RAPIDAS, PruebaSubtype.VIH_SIFILIS, "VS-314", 60, "Jurisdiccion"),
    (5, MovementKind.OUT, MaterialType.VIDA_SUERO_ORAL, None, "VSO2401", 40, "Consultorio 1"),
    (6, MovementKind.OUT, MaterialType.LAMINILLAS, None, "LAM-88", 120, "Consultorio 2"),
    (8, MovementKind.OUT, MaterialType.PRUEBAS_RAPIDAS, PruebaSubtype.HEPATITIS_B, "HB-001", 95, "Modulo Mujer"),
    (10, MovementKind.IN, MaterialType.CITOBRUSH, None, "CB-77", 8, "Donacion"),
    (12, MovementKind.IN, MaterialType.ESPEJOS_VAGINALES, None, "EV-M-12", 50, "Almacen Central"),
    (15, MovementKind.OUT, MaterialType.ESPEJOS_VAGINALES, None, "EV-M-12", 50, "Consultorio 3"),
]

created = 0
for day, kind, material, subtype, lot, qty, counterparty in movements_data:
    try:
        log.append({
            "kind": kind,
            "material": material.value,
            "subtype": subtype.value if subtype else None,
            "lot": lot,
            "quantity": qty,
            "counterparty": counterparty,
            "movement_date": start + timedelta(days=day),
        })
        created += 1
    except ValidationError as e:
        print(f"Atlandi ({lot}): {e.message}")

print(f"{created} hareket eklendi, {len(log.snapshot.buckets)} lot stokta")
