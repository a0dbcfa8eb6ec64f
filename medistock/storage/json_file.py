import json
import logging
import os
import tempfile
from pathlib import Path

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from medistock.exceptions import PersistenceError
from medistock.schemas.movement import MovementRecord
from medistock.storage.base import MovementStore

logger = logging.getLogger(__name__)

_movement_list = TypeAdapter(list[MovementRecord])

# Turetilmis alanlar dosyaya yazilmaz
_DERIVED_FIELDS = {"origin", "destination"}


class JsonFileMovementStore(MovementStore):
    """
    Tum defteri tek bir JSON dosyasinda tutar.
    Yazma atomiktir: once gecici dosyaya yazilir, sonra os.replace ile tasinir.
    """

    name = "json"

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load_all(self) -> list[MovementRecord]:
        if not self.path.exists():
            logger.info("Hareket dosyasi yok, bos defter ile baslaniyor: %s", self.path)
            return []

        try:
            raw = self.path.read_bytes()
            if not raw.strip():
                return []
            return _movement_list.validate_json(raw)
        except (OSError, PydanticValidationError) as e:
            logger.error("Hareket dosyasi okunamadi (%s): %s", self.path, e)
            raise PersistenceError(f"Hareket dosyasi okunamadi: {self.path}", backend=self.name)

    def save_all(self, movements: list[MovementRecord]) -> None:
        payload = [m.model_dump(mode="json", exclude=_DERIVED_FIELDS) for m in movements]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=self.path.name, suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "wb") as tmp:
                    tmp.write(json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8"))
                os.replace(tmp_name, self.path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            logger.error("Hareket dosyasi yazilamadi (%s): %s", self.path, e)
            raise PersistenceError(f"Hareket dosyasi yazilamadi: {self.path}", backend=self.name)
