"""
MediStock - Stok Servisi Testleri

Test edilen fonksiyonlar (medistock.services.stock):
    search_stock           - Envanter arama
    get_low_stock_buckets  - Dusuk stoklu lotlar
    aggregate_by_material  - Malzeme bazinda toplam
    get_dashboard_summary  - Dashboard ozeti
"""

from medistock.catalog import MATERIALS_LIST, SUBTYPED_MATERIAL
from medistock.services import stock as stock_service


class TestSearchStock:

    def test_no_search_returns_listed_buckets(self, movement_log, make_movement):
        make_movement("IN", "Laminillas", "L1", 5)
        make_movement("IN", "Citobrush", "C1", 5)
        make_movement("OUT", "Citobrush", "C1", 5)

        result = stock_service.search_stock(movement_log.snapshot)
        assert [b.lot for b in result] == ["L1"]

    def test_search_by_lot_material_subtype(self, movement_log, make_movement):
        make_movement("IN", "Laminillas", "L1", 5)
        make_movement("IN", SUBTYPED_MATERIAL, "P9", 5, subtype="Hepatitis C")
        snapshot = movement_log.snapshot

        assert [b.lot for b in stock_service.search_stock(snapshot, "p9")] == ["P9"]
        assert [b.lot for b in stock_service.search_stock(snapshot, "lamin")] == ["L1"]
        assert [b.lot for b in stock_service.search_stock(snapshot, "hepatitis c")] == ["P9"]
        assert stock_service.search_stock(snapshot, "yok") == []


class TestLowStock:

    def test_threshold_is_strict(self, movement_log, make_movement):
        make_movement("IN", "Laminillas", "L1", 10)
        make_movement("IN", "Laminillas", "L2", 9)
        make_movement("IN", "Laminillas", "L3", 2)

        low = stock_service.get_low_stock_buckets(movement_log.snapshot, threshold=10)
        assert [(b.lot, b.quantity) for b in low] == [("L3", 2), ("L2", 9)]

    def test_exhausted_not_listed(self, movement_log, make_movement):
        make_movement("IN", "Laminillas", "L1", 3)
        make_movement("OUT", "Laminillas", "L1", 3)
        assert stock_service.get_low_stock_buckets(movement_log.snapshot, threshold=10) == []


class TestDashboard:

    def test_empty(self, movement_log):
        summary = stock_service.get_dashboard_summary(movement_log.snapshot, movement_log.movements())
        assert summary.total_stock == 0
        assert summary.total_movements == 0
        assert summary.recent_movements == []
        assert summary.selected_material == MATERIALS_LIST[0]
        # Stogu olmayan katalog malzemeleri 0 ile gorunur
        assert len(summary.lowest_materials) == 5
        assert all(item.quantity == 0 for item in summary.lowest_materials)

    def test_summary_values(self, movement_log, make_movement):
        make_movement("IN", "Laminillas", "L1", 100)
        make_movement("IN", "Laminillas", "L2", 4)
        make_movement("OUT", "Laminillas", "L1", 30)
        last = make_movement("IN", "Citobrush", "C1", 8)

        summary = stock_service.get_dashboard_summary(
            movement_log.snapshot, movement_log.movements(), material="Laminillas",
        )
        assert summary.total_stock == 70 + 4 + 8
        assert summary.total_movements == 4
        assert summary.low_stock_count == 2
        assert summary.recent_movements[0].id == last.id
        assert [m.material for m in summary.material_history] == ["Laminillas"] * 3
        lowest = {item.name: item.quantity for item in summary.lowest_materials}
        assert lowest["Laminillas"] == 74
        assert lowest["Citobrush"] == 8
        assert summary.lowest_materials[0].quantity == 0

    def test_recent_limit(self, movement_log, make_movement):
        for n in range(12):
            make_movement("IN", "Laminillas", f"L{n}", 20)
        summary = stock_service.get_dashboard_summary(
            movement_log.snapshot, movement_log.movements(), recent_limit=10,
        )
        assert len(summary.recent_movements) == 10
        assert summary.recent_movements[0].lot == "L11"

    def test_aggregate_ignores_free_text_materials(self, movement_log, make_movement):
        make_movement("IN", "Material Libre", "X1", 1)
        names = {item.name for item in stock_service.aggregate_by_material(movement_log.snapshot, limit=50)}
        assert "Material Libre" not in names
        assert names == set(MATERIALS_LIST)
