"""
Hareket defteri.

Stogun tek dogruluk kaynagi. Hareketler eklenir (append) veya
yerinde duzeltilir (amend); silme yoktur. Her basarili degisiklikten
sonra tum defter depoya yazilir ve stok goruntusu bastan hesaplanir.

Bir islem ya tamamen basarili olur (defter guncellendi, depoya yazildi,
stok yeniden hesaplandi) ya da hic bir sey degismez.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, TypeVar

from pydantic import BaseModel, ValidationError as PydanticValidationError

from medistock.exceptions import NotFoundError
from medistock.schemas.movement import MovementCreate, MovementRecord, MovementUpdate
from medistock.services.projector import StockSnapshot, project
from medistock.services.validation import schema_error, validate_draft, validate_patch
from medistock.storage.base import MovementStore

logger = logging.getLogger(__name__)

Subscriber = Callable[[StockSnapshot], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return uuid.uuid4().hex


Schema = TypeVar("Schema", bound=BaseModel)


def _parse(schema: type[Schema], data: dict) -> Schema:
    # Sozlukle gelen girdi de HTTP ile ayni hata tipine donusur
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise schema_error(e.errors())


class MovementLog:
    def __init__(
        self,
        store: MovementStore,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = _new_id,
    ):
        self.store = store
        self._clock = clock
        self._id_factory = id_factory
        self._movements: list[MovementRecord] = []
        self._snapshot: StockSnapshot = project([])
        self._subscribers: list[Subscriber] = []
        # Dogrulama + yazma tek adim: ayni anda gelen iki cikis ayni stogu kullanamaz
        self._lock = threading.RLock()

    def load(self) -> None:
        """Defteri depodan doldur. Uygulama basinda bir kez cagrilir."""
        movements = self.store.load_all()
        self._movements = list(movements)
        self._snapshot = project(self._movements)
        logger.info(
            "Hareket defteri yuklendi (%s): %d hareket, %d stok kovasi",
            self.store.name, len(self._movements), len(self._snapshot.buckets),
        )

    @property
    def snapshot(self) -> StockSnapshot:
        return self._snapshot

    def movements(self) -> list[MovementRecord]:
        """Defterin kopyasi (saklama sirasi, kronolojik olmak zorunda degil)."""
        return list(self._movements)

    def get(self, movement_id: str) -> MovementRecord:
        return self._find(movement_id)[1]

    def append(self, draft: MovementCreate | dict) -> MovementRecord:
        """
        Yeni hareket ekle.
        OUT icin stok yeterliligi, bu ekleme oncesi hesaplanmis
        filtresiz stok goruntusune gore kontrol edilir.
        """
        if isinstance(draft, dict):
            draft = _parse(MovementCreate, draft)

        with self._lock:
            fields = validate_draft(draft, self._snapshot)
            now = self._clock()
            record = MovementRecord(
                id=self._id_factory(),
                timestamp=now,
                movement_date=draft.movement_date or now,
                **fields,
            )
            self._commit(self._movements + [record])

        logger.info(
            "Hareket eklendi: %s %s / %s / %s x%d (%s)",
            record.kind.value, record.material, record.subtype or "NA",
            record.lot, record.quantity, record.id,
        )
        return record

    def amend(self, movement_id: str, patch: MovementUpdate | dict) -> MovementRecord:
        """
        Mevcut hareketin alanlarini yerinde degistir.
        Stok yeterliligi tekrar kontrol edilmez; sonuc negatif olabilir.
        """
        if isinstance(patch, dict):
            patch = _parse(MovementUpdate, patch)

        with self._lock:
            index, record = self._find(movement_id)
            updates = validate_patch(record, patch)
            if not updates:
                return record

            amended = MovementRecord.model_validate(
                {**record.model_dump(exclude={"origin", "destination"}), **updates}
            )
            movements = list(self._movements)
            movements[index] = amended
            self._commit(movements)

        logger.info("Hareket duzeltildi: %s alanlar=%s", movement_id, sorted(updates))
        return amended

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Her basarili degisiklikten sonra yeni stok goruntusuyle cagrilacak
        fonksiyonu kaydet. Dondurur: aboneligi iptal eden fonksiyon.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _find(self, movement_id: str) -> tuple[int, MovementRecord]:
        for index, record in enumerate(self._movements):
            if record.id == movement_id:
                return index, record
        raise NotFoundError("Hareket", movement_id)

    def _commit(self, movements: list[MovementRecord]) -> None:
        # Once depoya yaz: PersistenceError olursa bellekteki defter degismez
        self.store.save_all(movements)
        self._movements = movements
        self._snapshot = project(movements)

        for callback in list(self._subscribers):
            try:
                callback(self._snapshot)
            except Exception as e:
                logger.error(f"Stok abonesi bildirimi basarisiz: {e}")
