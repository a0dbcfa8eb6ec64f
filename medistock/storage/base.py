"""Hareket defteri icin kalici depo arayuzu."""

from abc import ABC, abstractmethod

from medistock.schemas.movement import MovementRecord


class MovementStore(ABC):
    """
    Defter baslangicta load_all ile bir kez doldurulur,
    her basarili degisiklikten sonra save_all ile tamamen yazilir.
    Hata durumunda PersistenceError firlatilmali.
    """

    name: str = "base"

    @abstractmethod
    def load_all(self) -> list[MovementRecord]:
        """Saklanan tum hareketleri dondur (sira onemli degil)."""

    @abstractmethod
    def save_all(self, movements: list[MovementRecord]) -> None:
        """Depodaki hareketleri verilen listeyle degistir."""
