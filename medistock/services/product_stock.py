"""
Dogrudan miktar varyanti.

Hareket defterinden bagimsiz ikinci veri modeli: Product.quantity her
hareket yazilirken dogrudan guncellenir ve hareket ayrica
product_movements tablosuna eklenir. Iki model birbirine karistirilmaz.
"""

import uuid
import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from medistock.catalog import MovementKind
from medistock.exceptions import InsufficientStockError, NotFoundError, ValidationError
from medistock.models.product import Product
from medistock.models.product_movement import ProductMovement
from medistock.schemas.product import ProductCreate, ProductMovementCreate, ProductStockSummary

logger = logging.getLogger(__name__)


def get_products(
    db: Session, search: str | None = None, page: int = 1, size: int = 20,
) -> tuple[list[Product], int]:
    """
    Urun listesini sayfalama ile dondur.
    Arama urun adi ve SKU icinde yapilir.
    Dondurur: (urun_listesi, toplam_sayi)
    """
    query = db.query(Product)
    if search:
        pattern = f"%{search}%"
        query = query.filter(Product.name.ilike(pattern) | Product.sku.ilike(pattern))

    total = query.count()

    offset = (page - 1) * size
    products = query.order_by(Product.name.asc()).offset(offset).limit(size).all()

    return products, total


def get_product(db: Session, product_id: uuid.UUID) -> Product:
    product = db.query(Product).filter(Product.id == product_id).first()
    if not product:
        raise NotFoundError("Urun", product_id)
    return product


def create_product(db: Session, data: ProductCreate) -> Product:
    sku = data.sku.strip().upper()
    if db.query(Product).filter(Product.sku == sku).first():
        raise ValidationError(f"Bu SKU zaten kullaniliyor: {sku}", field="sku")

    product = Product(**data.model_dump(exclude={"sku"}), sku=sku)
    db.add(product)
    db.commit()
    db.refresh(product)
    logger.info("Urun olusturuldu: %s (%s)", product.name, product.sku)
    return product


def get_product_movements(
    db: Session,
    product_id: uuid.UUID | None = None,
    skip: int = 0,
    limit: int = 50,
) -> list[ProductMovement]:
    """
    Urun stok hareketlerini listele.
    Opsiyonel olarak belirli bir urune filtrelenebilir.
    En yeniden en eskiye siralanir.
    """
    query = db.query(ProductMovement)

    if product_id:
        query = query.filter(ProductMovement.product_id == product_id)

    return (
        query.order_by(ProductMovement.created_at.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )


def add_product_movement(
    db: Session,
    product_id: uuid.UUID,
    data: ProductMovementCreate,
) -> ProductMovement:
    """
    Stok hareketi ekle ve urun miktarini guncelle.

    - IN: miktara eklenir (+)
    - OUT: miktardan dusulur (-); sonuc negatif olacaksa reddedilir

    Onceki ve yeni miktar hareket kaydinda saklanir.
    Urun guncellemesi ve hareket kaydi ayni commit ile yazilir.
    """
    product = get_product(db, product_id)

    previous_quantity = product.quantity or 0

    if data.kind == MovementKind.IN:
        new_quantity = previous_quantity + data.quantity
    else:
        new_quantity = previous_quantity - data.quantity
        if new_quantity < 0:
            raise InsufficientStockError(
                lot=product.sku, available=previous_quantity, requested=data.quantity,
            )

    product.quantity = new_quantity

    movement = ProductMovement(
        product_id=product.id,
        product_name=product.name,
        kind=data.kind.value,
        quantity=data.quantity,
        movement_date=data.movement_date or datetime.now(timezone.utc),
        notes=(data.notes or "").strip() or None,
        previous_quantity=previous_quantity,
        new_quantity=new_quantity,
    )
    db.add(movement)
    db.commit()
    db.refresh(movement)

    logger.info(
        "Urun stok hareketi: %s - %s (%d adet, %d -> %d)",
        product.name, data.kind.value, data.quantity, previous_quantity, new_quantity,
    )
    return movement


def get_low_stock_products(db: Session) -> list[Product]:
    """
    Miktari kendi minimum stok degerine esit veya altinda olan urunleri getir.
    Miktara gore artan sirada siralanir.
    """
    return (
        db.query(Product)
        .filter(Product.quantity <= Product.min_stock)
        .order_by(Product.quantity.asc())
        .all()
    )


def get_stock_summary(db: Session) -> ProductStockSummary:
    """
    Stok ozet bilgilerini dondur:
    - total_products: Toplam urun sayisi
    - in_stock: Stokta olan urun sayisi (quantity > 0)
    - low_stock: Dusuk stoklu urun sayisi (0 < quantity <= min_stock)
    - out_of_stock: Stoksuz urun sayisi (quantity == 0)
    """
    base_query = db.query(Product)

    return ProductStockSummary(
        total_products=base_query.count(),
        in_stock=base_query.filter(Product.quantity > 0).count(),
        low_stock=base_query.filter(
            Product.quantity > 0, Product.quantity <= Product.min_stock
        ).count(),
        out_of_stock=base_query.filter(Product.quantity == 0).count(),
    )
