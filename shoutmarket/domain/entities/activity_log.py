"""Audit trail entry"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from ..enums import AccountRole


@dataclass(frozen=True)
class ActivityLogEntry:
    user_type: AccountRole
    user_id: Optional[UUID]
    action: str
    description: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=datetime.utcnow)
