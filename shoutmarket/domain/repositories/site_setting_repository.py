"""Site settings repository interface"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..enums import SettingType


@dataclass
class SiteSetting:
    key: str
    value: str
    type: SettingType = SettingType.STRING
    description: Optional[str] = None
    updated_at: datetime = field(default_factory=datetime.utcnow)


class ISiteSettingRepository(ABC):

    @abstractmethod
    async def list_all(self) -> List[SiteSetting]:
        pass

    @abstractmethod
    async def get_by_key(self, key: str) -> Optional[SiteSetting]:
        pass

    @abstractmethod
    async def upsert(self, setting: SiteSetting) -> SiteSetting:
        pass
