import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from medistock.exceptions import PersistenceError
from medistock.models.movement import Movement
from medistock.schemas.movement import MovementRecord
from medistock.storage.base import MovementStore

logger = logging.getLogger(__name__)

_COLUMNS = (
    "id", "timestamp", "movement_date", "kind", "material", "subtype",
    "lot", "quantity", "counterparty", "notes",
)


def _to_row(record: MovementRecord) -> dict:
    row = {name: getattr(record, name) for name in _COLUMNS}
    row["kind"] = record.kind.value
    return row


class SqlMovementStore(MovementStore):
    """
    Defteri "movements" tablosunda tutar.
    save_all tablo icerigini tek bir transaction icinde verilen listeyle esitler:
    yeni/duzeltilmis satirlar merge edilir, listede olmayanlar silinir.
    """

    name = "sql"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def load_all(self) -> list[MovementRecord]:
        db: Session = self.session_factory()
        try:
            rows = db.query(Movement).order_by(Movement.timestamp.asc()).all()
            return [MovementRecord.model_validate(row) for row in rows]
        except SQLAlchemyError as e:
            logger.error("Hareketler veritabanindan okunamadi: %s", e)
            raise PersistenceError("Hareketler veritabanindan okunamadi", backend=self.name)
        finally:
            db.close()

    def save_all(self, movements: list[MovementRecord]) -> None:
        db: Session = self.session_factory()
        try:
            keep_ids = {m.id for m in movements}
            stored_ids = {row_id for (row_id,) in db.query(Movement.id).all()}

            for record in movements:
                db.merge(Movement(**_to_row(record)))

            stale_ids = stored_ids - keep_ids
            if stale_ids:
                db.query(Movement).filter(Movement.id.in_(stale_ids)).delete(
                    synchronize_session=False
                )

            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Hareketler veritabanina yazilamadi: %s", e)
            raise PersistenceError("Hareketler veritabanina yazilamadi", backend=self.name)
        finally:
            db.close()
