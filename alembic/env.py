"""
Alembic ortami.

Baglanti adresi alembic.ini'den degil, uygulamanin kendi ayarlarindan
(medistock.config.settings.DATABASE_URL) gelir. Online modda uygulamanin
engine'i kullanilir; boylece SQLite icin check_same_thread gibi
baglanti ayarlari migration'larda da aynidir.
"""
import sys
from logging.config import fileConfig
from pathlib import Path

from alembic import context

# medistock paketi kurulmadan da `alembic upgrade head` calissin
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from medistock.config import settings  # noqa: E402
from medistock.database import Base, engine  # noqa: E402
import medistock.models  # noqa: E402,F401 - movements, products, product_movements

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)


def _options(is_sqlite: bool) -> dict:
    # SQLite ALTER TABLE desteklemez: batch modunda tablo yeniden olusturulur
    return {
        "target_metadata": Base.metadata,
        "compare_type": True,
        "render_as_batch": is_sqlite,
    }


def migrate_offline() -> None:
    """SQL ciktisi uret (veritabanina baglanmadan)."""
    url = settings.DATABASE_URL
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **_options(url.startswith("sqlite")),
    )
    with context.begin_transaction():
        context.run_migrations()


def migrate_online() -> None:
    with engine.connect() as connection:
        context.configure(
            connection=connection,
            **_options(connection.dialect.name == "sqlite"),
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    migrate_offline()
else:
    migrate_online()
