from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import List, Optional
from huntsplit.domain.entities import Hunt

class HuntRepository(ABC):
    @abstractmethod
    def save(self, hunt: Hunt) -> None:
        """Insert or update by code.

        Raises StaleHuntError when hunt.revision no longer matches the stored
        one, and HuntCodeConflict when a new hunt reuses a stored code. On
        success hunt.revision is bumped.
        """

    @abstractmethod
    def find_by_code(self, code: str) -> Optional[Hunt]:
        pass

    @abstractmethod
    def find_by_code_and_reporter(self, code: str, reporter: str) -> Optional[Hunt]:
        pass

    @abstractmethod
    def find_by_reporter(
        self,
        reporter: str,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Hunt]:
        """Hunts with an expense by reporter, start <= date < end, oldest first."""

    @abstractmethod
    def find_in_current_month(self, today: Optional[date] = None) -> List[Hunt]:
        pass

    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set_setting(self, key: str, value: str) -> None:
        pass
