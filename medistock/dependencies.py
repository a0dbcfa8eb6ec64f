import logging

from medistock.config import settings
from medistock.database import SessionLocal, get_db  # noqa: F401 - router'lar buradan import eder
from medistock.services.movement_log import MovementLog
from medistock.storage.base import MovementStore
from medistock.storage.json_file import JsonFileMovementStore
from medistock.storage.sql import SqlMovementStore

logger = logging.getLogger(__name__)

# Surec genelinde tek hareket defteri (tek kullanici, tek yazici)
_movement_log: MovementLog | None = None


def create_store(backend: str | None = None) -> MovementStore:
    """STORAGE_BACKEND ayarina gore depo olustur: "sql" veya "json"."""
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "sql":
        from medistock.database import Base, engine
        import medistock.models  # noqa: F401 - tablolarin metadata'ya eklenmesi icin

        # Migration calistirilmamis yerel kurulumlar icin
        Base.metadata.create_all(bind=engine)
        return SqlMovementStore(SessionLocal)
    if backend == "json":
        return JsonFileMovementStore(settings.JSON_STORE_PATH)
    raise ValueError(f"Bilinmeyen STORAGE_BACKEND: {backend} (gecerli: sql, json)")


def get_movement_log() -> MovementLog:
    """
    FastAPI dependency olarak kullanilir.
    Defter ilk istekte depodan bir kez yuklenir, sonra ayni nesne kullanilir.
    Testlerde app.dependency_overrides ile degistirilir.
    """
    global _movement_log
    if _movement_log is None:
        log = MovementLog(create_store())
        log.load()
        _movement_log = log
    return _movement_log
