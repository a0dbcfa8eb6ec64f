import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from medistock.database import Base


class ProductMovement(Base):
    """
    Urun stok hareketi (dogrudan miktar varyanti).
    Urun miktari degistirilirken ayni islemde eklenir.
    Her hareket onceki ve yeni miktari saklar.
    """

    __tablename__ = "product_movements"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )
    product_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    # Urun adi hareket aninda kopyalanir (urun adi sonradan degisebilir)
    product_name: Mapped[str] = mapped_column(
        String(255), nullable=False
    )

    # Hareket tipi: "IN" veya "OUT"
    kind: Mapped[str] = mapped_column(
        String(3), nullable=False
    )
    # Miktar (her zaman pozitif sayi olarak saklanir)
    quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    movement_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    notes: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    previous_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )
    new_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    product: Mapped["Product"] = relationship()

    __table_args__ = (
        Index("ix_product_movements_product_id", "product_id"),
        Index("ix_product_movements_created_at", "created_at"),
    )
