"""
MediStock - Hareket Defteri Testleri

Test edilen metodlar (medistock.services.movement_log.MovementLog):
    append     - Hareket ekleme (dogrulama + stok kontrolu)
    amend      - Hareket duzeltme
    get        - Hareket detay
    subscribe  - Degisiklik bildirimi
    load       - Depodan baslangic yuklemesi
"""

import threading
import time
from datetime import datetime, timezone

import pytest

from medistock.catalog import MovementKind, SUBTYPED_MATERIAL
from medistock.exceptions import (
    InsufficientStockError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from medistock.services.movement_log import MovementLog
from medistock.storage.memory import InMemoryMovementStore


class FailingStore(InMemoryMovementStore):
    """save_all her zaman basarisiz olan depo."""

    def save_all(self, movements):
        raise PersistenceError("disk dolu", backend="memory")


class TestAppend:
    """Hareket ekleme testleri."""

    def test_append_in(self, movement_log, memory_store, clock):
        """Giris hareketi normalize edilip kaydedilmeli."""
        record = movement_log.append({
            "kind": "IN",
            "material": "Gauze",
            "lot": " a1 ",
            "quantity": "50",
            "counterparty": "almacen",
            "notes": "  primera entrega ",
        })
        assert record.lot == "A1"
        assert record.counterparty == "ALMACEN"
        assert record.origin == "ALMACEN"
        assert record.destination is None
        assert record.quantity == 50
        assert record.notes == "primera entrega"
        assert record.id
        # Is tarihi verilmezse kayit ani kullanilir
        assert record.movement_date == record.timestamp
        # Her basarili degisiklikten sonra tum defter depoya yazilir
        assert memory_store.save_count == 1
        assert memory_store.load_all() == [record]

    def test_in_then_out_bucket(self, movement_log, make_movement):
        """50 giris, 20 cikis -> 30."""
        make_movement("IN", "Gauze", "A1", 50)
        out = make_movement("OUT", "Gauze", "A1", 20, counterparty="consultorio 1")

        assert out.destination == "CONSULTORIO 1"
        assert movement_log.snapshot.available("Gauze", None, "A1") == 30

    def test_out_exceeding_stock_rejected(self, movement_log, make_movement, memory_store):
        """Mevcut 30 iken 31 cikis reddedilmeli, mesajda mevcut miktar olmali."""
        make_movement("IN", "Gauze", "A1", 50)
        make_movement("OUT", "Gauze", "A1", 20)

        with pytest.raises(InsufficientStockError) as exc_info:
            make_movement("OUT", "Gauze", "A1", 31)

        error = exc_info.value
        assert error.available == 30
        assert error.requested == 31
        assert error.shortfall == 1
        assert "30" in error.message
        # Hicbir sey degismemeli
        assert len(movement_log.movements()) == 2
        assert memory_store.save_count == 2

    def test_out_equal_to_stock_drives_zero(self, movement_log, make_movement):
        """Mevcut miktarin tamami cekilince kova listeden cikar, lookup'ta 0 kalir."""
        make_movement("IN", "Gauze", "A1", 30)
        make_movement("OUT", "Gauze", "A1", 30)

        snapshot = movement_log.snapshot
        assert snapshot.buckets == []
        assert snapshot.available("Gauze", None, "A1") == 0

    def test_redeposit_after_zero(self, movement_log, make_movement):
        """Sifira inen lota tekrar giris yapilip cikis yapilabilmeli."""
        make_movement("IN", "Gauze", "A1", 5)
        make_movement("OUT", "Gauze", "A1", 5)
        make_movement("IN", "Gauze", "A1", 8)
        make_movement("OUT", "Gauze", "A1", 8)
        assert movement_log.snapshot.available("Gauze", None, "A1") == 0

    def test_out_lot_is_normalized_before_check(self, make_movement, movement_log):
        make_movement("IN", "Gauze", "A1", 10)
        make_movement("OUT", "Gauze", " a1", 10)
        assert movement_log.snapshot.available("Gauze", None, "A1") == 0

    def test_subtyped_material_defaults_subtype(self, make_movement):
        record = make_movement("IN", SUBTYPED_MATERIAL, "P1", 10)
        assert record.subtype == "Hepatitis B"

    def test_out_checks_exact_subtype(self, make_movement):
        """Ayni lot, farkli alt tip: stok paylasilmaz."""
        make_movement("IN", SUBTYPED_MATERIAL, "P1", 10, subtype="Hepatitis B")
        with pytest.raises(InsufficientStockError):
            make_movement("OUT", SUBTYPED_MATERIAL, "P1", 1, subtype="Hepatitis C")

    def test_invalid_quantity_never_reaches_log(self, movement_log, memory_store):
        with pytest.raises(ValidationError):
            movement_log.append({
                "kind": "IN", "material": "Gauze", "lot": "A1",
                "quantity": "abc", "counterparty": "X",
            })
        assert movement_log.movements() == []
        assert memory_store.save_count == 0

    def test_explicit_business_date(self, make_movement):
        day = datetime(2025, 12, 24, 10, 30, tzinfo=timezone.utc)
        record = make_movement("IN", "Gauze", "A1", 1, movement_date=day)
        assert record.movement_date == day
        assert record.timestamp != day


class TestAmend:
    """Hareket duzeltme testleri."""

    def test_amend_can_drive_negative(self, movement_log, make_movement):
        """Ilk girisi 50 -> 10 yapinca kova 10 - 20 = -10 olur, hata yok."""
        first = make_movement("IN", "Gauze", "A1", 50)
        make_movement("OUT", "Gauze", "A1", 20)

        amended = movement_log.amend(first.id, {"quantity": 10})

        assert amended.id == first.id
        assert amended.timestamp == first.timestamp
        assert amended.quantity == 10
        snapshot = movement_log.snapshot
        assert snapshot.available("Gauze", None, "A1") == -10
        assert snapshot.buckets == []

    def test_amend_keeps_unspecified_fields(self, movement_log, make_movement):
        first = make_movement("IN", "Gauze", "A1", 50, counterparty="origen", notes="nota")
        amended = movement_log.amend(first.id, {"lot": "b7"})

        assert amended.lot == "B7"
        assert amended.counterparty == "ORIGEN"
        assert amended.notes == "nota"
        assert amended.kind == MovementKind.IN
        assert movement_log.get(first.id) == amended
        # Stok yeni lota tasinir
        assert movement_log.snapshot.available("Gauze", None, "A1") == 0
        assert movement_log.snapshot.available("Gauze", None, "B7") == 50

    def test_amend_in_place(self, movement_log, make_movement):
        """Duzeltme yeni kayit eklemez, ayni pozisyondaki kaydi degistirir."""
        first = make_movement("IN", "Gauze", "A1", 5)
        second = make_movement("IN", "Gauze", "A2", 5)
        movement_log.amend(first.id, {"quantity": 6})
        assert [m.id for m in movement_log.movements()] == [first.id, second.id]

    def test_amend_unknown_id(self, movement_log):
        with pytest.raises(NotFoundError):
            movement_log.amend("yok", {"quantity": 3})

    def test_amend_invalid_quantity(self, movement_log, make_movement):
        first = make_movement("IN", "Gauze", "A1", 5)
        with pytest.raises(ValidationError):
            movement_log.amend(first.id, {"quantity": -2})
        assert movement_log.get(first.id).quantity == 5

    def test_empty_patch_is_noop(self, movement_log, make_movement, memory_store):
        first = make_movement("IN", "Gauze", "A1", 5)
        assert movement_log.amend(first.id, {}) == first
        assert memory_store.save_count == 1


class TestPersistenceFailure:
    """Depo hatasinda bellekteki defter degismemeli."""

    def test_append_rolls_back(self, clock):
        log = MovementLog(FailingStore(), clock=clock)
        log.load()
        with pytest.raises(PersistenceError):
            log.append({
                "kind": "IN", "material": "Gauze", "lot": "A1",
                "quantity": 5, "counterparty": "X",
            })
        assert log.movements() == []
        assert log.snapshot.buckets == []

    def test_amend_rolls_back(self, clock, movement_log, make_movement):
        first = make_movement("IN", "Gauze", "A1", 5)
        failing = MovementLog(FailingStore(movement_log.movements()), clock=clock)
        failing.load()

        with pytest.raises(PersistenceError):
            failing.amend(first.id, {"quantity": 99})
        assert failing.get(first.id).quantity == 5
        assert failing.snapshot.available("Gauze", None, "A1") == 5


class TestLoadAndSubscribe:

    def test_load_seeds_snapshot(self, movement_log, make_movement, clock):
        make_movement("IN", "Gauze", "A1", 12)
        reloaded = MovementLog(InMemoryMovementStore(movement_log.movements()), clock=clock)
        reloaded.load()
        assert reloaded.snapshot.available("Gauze", None, "A1") == 12

    def test_subscribers_receive_snapshot(self, movement_log, make_movement):
        received = []
        unsubscribe = movement_log.subscribe(received.append)

        make_movement("IN", "Gauze", "A1", 3)
        assert len(received) == 1
        assert received[0].available("Gauze", None, "A1") == 3

        unsubscribe()
        make_movement("IN", "Gauze", "A1", 3)
        assert len(received) == 1

    def test_failing_subscriber_does_not_break_append(self, movement_log, make_movement):
        def broken(snapshot):
            raise RuntimeError("ekran kapali")

        movement_log.subscribe(broken)
        record = make_movement("IN", "Gauze", "A1", 3)
        assert movement_log.get(record.id) == record

    def test_get_unknown(self, movement_log):
        with pytest.raises(NotFoundError):
            movement_log.get("missing")


class SlowStore(InMemoryMovementStore):
    """Yazma sirasinda bekleyen depo: eszamanli isteklerin cakismasini saglar."""

    def save_all(self, movements):
        time.sleep(0.05)
        super().save_all(movements)


class TestConcurrentWrites:

    def test_parallel_outs_cannot_share_stock(self, clock):
        """Ayni 5 birimi iki thread ayni anda cekmeye calisir: sadece biri basarili."""
        log = MovementLog(SlowStore(), clock=clock)
        log.load()
        log.append({"kind": "IN", "material": "Gauze", "lot": "A1", "quantity": 5, "counterparty": "X"})

        results = []
        barrier = threading.Barrier(2)

        def withdraw():
            barrier.wait()
            try:
                log.append({
                    "kind": "OUT", "material": "Gauze", "lot": "A1",
                    "quantity": 5, "counterparty": "Y",
                })
                results.append("ok")
            except InsufficientStockError:
                results.append("rejected")

        threads = [threading.Thread(target=withdraw) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(results) == ["ok", "rejected"]
        assert log.snapshot.available("Gauze", None, "A1") == 0
        assert len(log.movements()) == 2


class TestDictInput:
    """Sozlukle gelen girdi de sema hatalarini domain hatasina cevirir."""

    def test_boolean_quantity_rejected(self, movement_log, memory_store):
        with pytest.raises(ValidationError) as exc_info:
            movement_log.append({
                "kind": "IN", "material": "Gauze", "lot": "A1",
                "quantity": True, "counterparty": "X",
            })
        assert exc_info.value.field == "quantity"
        assert movement_log.movements() == []
        assert memory_store.save_count == 0

    def test_unknown_kind_rejected(self, movement_log):
        with pytest.raises(ValidationError) as exc_info:
            movement_log.append({
                "kind": "MOVE", "material": "Gauze", "lot": "A1",
                "quantity": 1, "counterparty": "X",
            })
        assert exc_info.value.field == "kind"

    def test_amend_fractional_quantity_rejected(self, movement_log, make_movement):
        first = make_movement("IN", "Gauze", "A1", 5)
        with pytest.raises(ValidationError) as exc_info:
            movement_log.amend(first.id, {"quantity": 2.5})
        assert exc_info.value.field == "quantity"
        assert movement_log.get(first.id).quantity == 5
