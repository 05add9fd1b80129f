"""Activity log repository implementation"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, desc, func, select
from sqlalchemy.orm import Session

from ...domain.entities.activity_log import ActivityLogEntry
from ...domain.enums import AccountRole
from ...domain.repositories.activity_log_repository import IActivityLogRepository
from ..orm.activity_log_model import ActivityLogModel


class ActivityLogRepositoryImpl(IActivityLogRepository):

    def __init__(self, session: Session):
        self.session = session

    async def add(self, entry: ActivityLogEntry) -> None:
        self.session.add(ActivityLogModel(
            id=entry.id,
            user_type=entry.user_type.value,
            user_id=entry.user_id,
            action=entry.action,
            description=entry.description,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            details=entry.metadata,
            created_at=entry.created_at,
        ))
        self.session.flush()

    async def search(
        self,
        since: datetime,
        search: Optional[str] = None,
        user_type: Optional[AccountRole] = None,
        action: Optional[str] = None,
        page: int = 1,
        limit: int = 50
    ) -> List[ActivityLogEntry]:
        query = self.session.query(ActivityLogModel).filter(ActivityLogModel.created_at >= since)
        if search:
            query = query.filter(ActivityLogModel.description.ilike(f"%{search}%"))
        if user_type is not None:
            query = query.filter(ActivityLogModel.user_type == user_type.value)
        if action:
            query = query.filter(ActivityLogModel.action.ilike(f"%{action}%"))
        models = query.order_by(desc(ActivityLogModel.created_at)).offset((page - 1) * limit).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    async def recent(self, limit: int = 20) -> List[ActivityLogEntry]:
        models = self.session.query(ActivityLogModel).order_by(desc(ActivityLogModel.created_at)).limit(limit).all()
        return [self._map_to_entity(model) for model in models]

    async def prune(self, older_than: datetime, max_entries: int) -> int:
        removed = self.session.execute(
            delete(ActivityLogModel).where(ActivityLogModel.created_at < older_than)
        ).rowcount or 0

        total = self.session.scalar(select(func.count()).select_from(ActivityLogModel)) or 0
        overflow = total - max_entries
        if overflow > 0:
            oldest = (
                select(ActivityLogModel.id)
                .order_by(ActivityLogModel.created_at.asc())
                .limit(overflow)
                .scalar_subquery()
            )
            removed += self.session.execute(
                delete(ActivityLogModel).where(ActivityLogModel.id.in_(oldest))
            ).rowcount or 0
        return removed

    def _map_to_entity(self, model: ActivityLogModel) -> ActivityLogEntry:
        return ActivityLogEntry(
            id=model.id,
            user_type=AccountRole(model.user_type),
            user_id=model.user_id,
            action=model.action,
            description=model.description,
            ip_address=model.ip_address,
            user_agent=model.user_agent,
            metadata=model.details,
            created_at=model.created_at,
        )
