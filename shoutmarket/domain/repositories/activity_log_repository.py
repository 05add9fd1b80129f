"""Activity log repository interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from ..entities.activity_log import ActivityLogEntry
from ..enums import AccountRole


class IActivityLogRepository(ABC):

    @abstractmethod
    async def add(self, entry: ActivityLogEntry) -> None:
        pass

    @abstractmethod
    async def search(
        self,
        since: datetime,
        search: Optional[str] = None,
        user_type: Optional[AccountRole] = None,
        action: Optional[str] = None,
        page: int = 1,
        limit: int = 50
    ) -> List[ActivityLogEntry]:
        pass

    @abstractmethod
    async def recent(self, limit: int = 20) -> List[ActivityLogEntry]:
        pass

    @abstractmethod
    async def prune(self, older_than: datetime, max_entries: int) -> int:
        """Drop entries older than ``older_than``, then the oldest beyond
        ``max_entries``. Returns how many rows were removed."""
        pass
