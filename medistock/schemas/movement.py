from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, StrictInt, computed_field, field_validator

from medistock.catalog import MovementKind


def _as_utc(value: datetime | None) -> datetime | None:
    # Saat dilimi olmayan tarihler UTC kabul edilir (SQLite tz saklamaz)
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class MovementCreate(BaseModel):
    """
    Yeni hareket taslagi (dogrulama oncesi ham girdi).

    quantity bilerek StrictInt | str: formdan gelen "12" gibi degerler
    dogrulama katmaninda parse edilir. true veya 2.5 gibi degerler
    1 / 2'ye yuvarlanmadan sema seviyesinde reddedilir.
    counterparty: IN icin kaynak, OUT icin hedef.
    """
    kind: MovementKind
    material: str
    subtype: str | None = None
    lot: str = ""
    quantity: StrictInt | str
    counterparty: str = ""
    notes: str | None = None
    # Is tarihi; verilmezse kayit ani kullanilir
    movement_date: datetime | None = None

    @field_validator("movement_date")
    @classmethod
    def normalize_date(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class MovementUpdate(BaseModel):
    """
    Hareket duzeltme (partial update).
    Sadece gonderilen alanlar guncellenir; id, timestamp ve kind degismez.
    """
    material: str | None = None
    subtype: str | None = None
    lot: str | None = None
    quantity: StrictInt | str | None = None
    counterparty: str | None = None
    notes: str | None = None
    movement_date: datetime | None = None

    @field_validator("movement_date")
    @classmethod
    def normalize_date(cls, value: datetime | None) -> datetime | None:
        return _as_utc(value)


class MovementRecord(BaseModel):
    """
    Defterde saklanan hareket kaydi.
    Olusturulduktan sonra degistirilemez; duzeltme yeni bir kopya uretir.
    """
    id: str
    timestamp: datetime
    movement_date: datetime
    kind: MovementKind
    material: str
    subtype: str | None = None
    lot: str
    quantity: int = Field(gt=0)
    counterparty: str
    notes: str | None = None

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @field_validator("timestamp", "movement_date")
    @classmethod
    def normalize_dates(cls, value: datetime) -> datetime:
        return _as_utc(value)

    @computed_field
    @property
    def origin(self) -> str | None:
        return self.counterparty if self.kind == MovementKind.IN else None

    @computed_field
    @property
    def destination(self) -> str | None:
        return self.counterparty if self.kind == MovementKind.OUT else None

