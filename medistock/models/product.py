import uuid
from datetime import datetime

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from medistock.database import Base


class Product(Base):
    """
    Urun modeli (dogrudan miktar varyanti).
    Hareket defterinden bagimsizdir: quantity her hareket yazilirken
    dogrudan guncellenir, hareketler ayrica product_movements tablosuna eklenir.
    """

    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        primary_key=True, default=uuid.uuid4
    )

    name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    category: Mapped[str] = mapped_column(
        String(100), default="General"
    )
    # Urun kodu
    sku: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True
    )
    quantity: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    # Bu degerin altina inince dusuk stok uyarisi
    min_stock: Mapped[int] = mapped_column(
        Integer, default=0, nullable=False
    )
    # Birim (pza, kg, lt, caja)
    unit: Mapped[str] = mapped_column(
        String(20), default="pza"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )
