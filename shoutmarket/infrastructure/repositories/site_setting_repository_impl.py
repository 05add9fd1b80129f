"""Site settings repository implementation"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from ...domain.enums import SettingType
from ...domain.repositories.site_setting_repository import ISiteSettingRepository, SiteSetting
from ..orm.activity_log_model import SiteSettingModel


class SiteSettingRepositoryImpl(ISiteSettingRepository):

    def __init__(self, session: Session):
        self.session = session

    async def list_all(self) -> List[SiteSetting]:
        models = self.session.query(SiteSettingModel).order_by(SiteSettingModel.key).all()
        return [self._map_to_entity(model) for model in models]

    async def get_by_key(self, key: str) -> Optional[SiteSetting]:
        model = self.session.query(SiteSettingModel).filter(SiteSettingModel.key == key).first()
        return self._map_to_entity(model) if model else None

    async def upsert(self, setting: SiteSetting) -> SiteSetting:
        model = self.session.query(SiteSettingModel).filter(SiteSettingModel.key == setting.key).first()
        if model is None:
            model = SiteSettingModel(key=setting.key)
            self.session.add(model)
        model.value = setting.value
        model.type = setting.type.value
        model.description = setting.description
        model.updated_at = datetime.utcnow()
        self.session.flush()
        return self._map_to_entity(model)

    def _map_to_entity(self, model: SiteSettingModel) -> SiteSetting:
        return SiteSetting(
            key=model.key,
            value=model.value,
            type=SettingType(model.type),
            description=model.description,
            updated_at=model.updated_at,
        )
