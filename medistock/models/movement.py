from datetime import datetime

from sqlalchemy import String, Text, Integer, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from medistock.database import Base


class Movement(Base):
    """
    Hareket defteri satiri (sql backend).
    Stok miktari burada tutulmaz; her zaman hareketlerden hesaplanir.
    """

    __tablename__ = "movements"

    # Uygulama tarafinda uretilen opak kimlik (uuid4 hex)
    id: Mapped[str] = mapped_column(
        String(32), primary_key=True
    )
    # Kayit ani: sadece siralama icin
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    # Is tarihi: kullanici tarafindan duzeltilebilir
    movement_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )

    # Hareket tipi: "IN" (giris) veya "OUT" (cikis)
    kind: Mapped[str] = mapped_column(
        String(3), nullable=False
    )
    material: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    # Sadece hizli testler icin dolu, diger malzemelerde null
    subtype: Mapped[str | None] = mapped_column(
        String(100), nullable=True
    )
    lot: Mapped[str] = mapped_column(
        String(100), nullable=False
    )
    # Miktar (her zaman pozitif; yonu kind belirler)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    # IN icin kaynak, OUT icin hedef
    counterparty: Mapped[str] = mapped_column(
        String(255), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(
        Text, nullable=True
    )

    __table_args__ = (
        Index("ix_movements_timestamp", "timestamp"),
        Index("ix_movements_material_lot", "material", "lot"),
    )
