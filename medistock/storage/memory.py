from medistock.schemas.movement import MovementRecord
from medistock.storage.base import MovementStore


class InMemoryMovementStore(MovementStore):
    """Bellekte tutulan depo. Testler ve gecici kullanim icin."""

    name = "memory"

    def __init__(self, movements: list[MovementRecord] | None = None):
        self._movements = list(movements or [])
        self.save_count = 0

    def load_all(self) -> list[MovementRecord]:
        return list(self._movements)

    def save_all(self, movements: list[MovementRecord]) -> None:
        self._movements = list(movements)
        self.save_count += 1
