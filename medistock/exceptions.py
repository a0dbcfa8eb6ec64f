"""
MediStock domain hatalari.

Servis katmani HTTP'den bagimsizdir; bu hatalari firlatir,
main.py'deki exception handler'lar bunlari JSON yanitlara cevirir:

    ValidationError   -> 400 (kullanici duzeltip tekrar deneyebilir)
    NotFoundError     -> 404 (normal akista olusmamali)
    PersistenceError  -> 503 (bellekteki durum gecerli kalir, otomatik tekrar yok)
"""

from typing import Any


class MediStockError(Exception):
    """Tum MediStock hatalarinin temel sinifi."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """API yaniti icin sozluge cevir."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(MediStockError):
    """Gecersiz veya yetersiz girdi."""

    def __init__(self, message: str, field: str | None = None, **details: Any):
        if field:
            details["field"] = field
        super().__init__(message, code="VALIDATION_ERROR", details=details)
        self.field = field


class InsufficientStockError(ValidationError):
    """Cikis miktari lottaki mevcut stogu asiyor."""

    def __init__(self, lot: str, available: int, requested: int):
        self.lot = lot
        self.available = available
        self.requested = requested
        self.shortfall = requested - available
        super().__init__(
            f"Yetersiz stok. Lot {lot} icin mevcut: {available}, "
            f"istenen: {requested}, eksik: {self.shortfall}",
            field="quantity",
            lot=lot,
            available=available,
            requested=requested,
            shortfall=self.shortfall,
        )
        self.code = "INSUFFICIENT_STOCK"


class NotFoundError(MediStockError):
    """Istenen kayit bulunamadi."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            f"{entity_type} bulunamadi: {entity_id}",
            code="NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class PersistenceError(MediStockError):
    """Kalici depoya okuma/yazma basarisiz oldu."""

    def __init__(self, message: str, backend: str | None = None):
        super().__init__(
            message,
            code="PERSISTENCE_ERROR",
            details={"backend": backend} if backend else None,
        )
