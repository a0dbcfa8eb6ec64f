"""
Malzeme katalogu.

Serbest metin malzeme adlari da kabul edilir; buradaki liste
form secenekleri ve dashboard'daki malzeme ozeti icin kullanilir.
Alt tip yalnizca hizli testler (Pruebas Rapidas) icin gecerlidir.
"""

from enum import Enum


class MaterialType(str, Enum):
    VIDA_SUERO_ORAL = "Vida Suero Oral"
    ESPEJOS_VAGINALES = "Espejos Vaginales"
    LAMINILLAS = "Laminillas"
    CITOBRUSH = "Citobrush"
    PRUEBAS_RAPIDAS = "Pruebas Rápidas"


class PruebaSubtype(str, Enum):
    HEPATITIS_B = "Hepatitis B"
    HEPATITIS_C = "Hepatitis C"
    VIH_SIFILIS = "VIH / Sífilis"
    ANTIGENO_PROSTATICO = "Antígeno Prostático"


class MovementKind(str, Enum):
    IN = "IN"
    OUT = "OUT"


MATERIALS_LIST: list[str] = [m.value for m in MaterialType]
PRUEBAS_SUBTYPES: list[str] = [s.value for s in PruebaSubtype]

# Alt tip tasiyan tek katalog malzemesi
SUBTYPED_MATERIAL: str = MaterialType.PRUEBAS_RAPIDAS.value

# Rapor ve disa aktarmada gosterilen hareket etiketleri
KIND_LABELS = {MovementKind.IN: "GIRIS", MovementKind.OUT: "CIKIS"}


def carries_subtype(material: str) -> bool:
    return material == SUBTYPED_MATERIAL
