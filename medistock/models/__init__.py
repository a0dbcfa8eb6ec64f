# Tum modelleri buradan import ediyoruz
# Boylece Alembic autogenerate tum tablolari gorebilir
from medistock.models.movement import Movement
from medistock.models.product import Product
from medistock.models.product_movement import ProductMovement

__all__ = ["Movement", "Product", "ProductMovement"]
