"""
MediStock - Test Yapilandirmasi (conftest.py)

SQLite in-memory veritabani ve bellekte tutulan hareket deposu
kullanarak harici servis gerektirmeden tum katmanlari test etmeye
olanak saglar.

Her test fonksiyonu icin temiz bir veritabani ve bos bir defter
olusturulur (function scope).
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from medistock.database import Base, get_db
from medistock.dependencies import get_movement_log
from medistock.main import app
from medistock.rate_limit import limiter
from medistock.services.movement_log import MovementLog
from medistock.storage.memory import InMemoryMovementStore
from medistock.storage.sql import SqlMovementStore

# Tum modelleri import et - Base.metadata.create_all icin gerekli
from medistock.models import Movement, Product, ProductMovement  # noqa: F401


# ---------------------------------------------------------------------------
# SQLite In-Memory Test Veritabani
# ---------------------------------------------------------------------------

# StaticPool: TestClient farkli thread'den baglansa da ayni in-memory veritabani
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    echo=False,
)


# SQLite varsayilan olarak foreign key constraint'leri uygulamaz
@event.listens_for(test_engine, "connect")
def _set_sqlite_pragma(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

# Testler ayni istemciden cok sayida istek atar
limiter.enabled = False

START = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


class FakeClock:
    """Her cagrida bir dakika ilerleyen saat: timestamp'ler benzersiz ve artan olur."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="function")
def db_session():
    """
    Her test icin temiz bir veritabani oturumu olusturur.

    - Tablolari olusturur (create_all)
    - Test bittikten sonra tablolari siler (drop_all)
    """
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def clock():
    return FakeClock()


@pytest.fixture(scope="function")
def memory_store():
    return InMemoryMovementStore()


@pytest.fixture(scope="function")
def movement_log(memory_store, clock):
    """Bellekte tutulan depoya bagli, bos bir hareket defteri."""
    log = MovementLog(memory_store, clock=clock)
    log.load()
    return log


@pytest.fixture(scope="function")
def make_movement(movement_log):
    """
    Deftere hizlica hareket eklemek icin yardimci.

    Kullanim:
        make_movement("IN", "Gauze", "A1", 50)
    """
    def _make(kind, material, lot, quantity, counterparty="ALMACEN", subtype=None, **extra):
        return movement_log.append({
            "kind": kind,
            "material": material,
            "subtype": subtype,
            "lot": lot,
            "quantity": quantity,
            "counterparty": counterparty,
            **extra,
        })

    return _make


@pytest.fixture(scope="function")
def client(db_session, movement_log):
    """
    FastAPI TestClient olusturur.

    get_db ve get_movement_log dependency'lerini override ederek
    test veritabanini ve test defterini kullanir.
    """
    def _override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_movement_log] = lambda: movement_log

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def test_product(db_session):
    """Test urunu olusturur ve veritabanina kaydeder (stok: 100)."""
    product = Product(
        name="Guantes de Latex",
        category="Insumos",
        sku="GL-100",
        quantity=100,
        min_stock=20,
        unit="caja",
    )
    db_session.add(product)
    db_session.commit()
    db_session.refresh(product)
    return product


@pytest.fixture(scope="function")
def sql_store(db_session):
    """Test veritabanina bagli sql hareket deposu."""
    return SqlMovementStore(TestSessionLocal)
