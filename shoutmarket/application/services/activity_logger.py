"""Best-effort audit trail.

Entries are written in their own session after the business transaction has
committed, so a failed insert can neither roll back nor block the operation
being recorded.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from ...db.database import SessionLocal, session_scope
from ...domain.entities.activity_log import ActivityLogEntry
from ...domain.enums import AccountRole
from ...infrastructure.repositories.activity_log_repository_impl import ActivityLogRepositoryImpl

logger = logging.getLogger(__name__)

REGISTRATION = "REGISTRATION"
LOGIN = "LOGIN"
ORDER_CREATED = "ORDER_CREATED"
ORDER_ACCEPTED = "ORDER_ACCEPTED"
ORDER_REJECTED = "ORDER_REJECTED"
ORDER_COMPLETED = "ORDER_COMPLETED"
ORDER_CANCELLED = "ORDER_CANCELLED"
PAYMENT_CONFIRMED = "PAYMENT_CONFIRMED"
WITHDRAWAL_REQUESTED = "WITHDRAWAL_REQUESTED"
WITHDRAWAL_APPROVED = "WITHDRAWAL_APPROVED"
WITHDRAWAL_REJECTED = "WITHDRAWAL_REJECTED"
ADMIN_ACCOUNT_CREATED = "ADMIN_ACCOUNT_CREATED"
USER_UPDATED = "USER_UPDATED"
CREATOR_UPDATED = "CREATOR_UPDATED"
SETTING_UPDATED = "SETTING_UPDATED"


@dataclass(frozen=True)
class ClientInfo:
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def _id(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return getattr(value, "value", value)


def _amount(value: Any) -> float:
    amount = getattr(value, "amount", value)
    return float(amount) if isinstance(amount, Decimal) else amount


class ActivityLogger:

    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    async def log(
        self,
        user_type: AccountRole,
        user_id: Any,
        action: str,
        description: str,
        client: Optional[ClientInfo] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Persist one entry. Never raises."""
        client = client or ClientInfo()
        try:
            entry = ActivityLogEntry(
                user_type=user_type,
                user_id=_id(user_id),
                action=action,
                description=description,
                ip_address=client.ip_address,
                user_agent=client.user_agent,
                metadata=metadata,
            )
            with session_scope(self.session_factory) as session:
                await ActivityLogRepositoryImpl(session).add(entry)
        except Exception:
            logger.exception("Failed to log activity %s for %s %s", action, user_type, user_id)

    async def registration(self, role: AccountRole, account_id, email: str, client: Optional[ClientInfo] = None):
        label = "Creator" if role == AccountRole.CREATOR else "User"
        await self.log(role, account_id, REGISTRATION, f"{label} registered with email: {email}", client)

    async def login(self, role: AccountRole, account_id, email: str, client: Optional[ClientInfo] = None):
        label = {AccountRole.CREATOR: "Creator", AccountRole.ADMIN: "Admin"}.get(role, "User")
        await self.log(role, account_id, LOGIN, f"{label} logged in: {email}", client)

    async def order_created(self, user_id, order_id, amount, client: Optional[ClientInfo] = None):
        await self.log(
            AccountRole.USER, user_id, ORDER_CREATED,
            f"Order created: {_id(order_id)} for ${_amount(amount)}", client,
            metadata={"orderId": str(_id(order_id)), "amount": _amount(amount)},
        )

    async def payment_confirmed(self, user_id, order_id, order_number: str, earnings):
        await self.log(
            AccountRole.USER, user_id, PAYMENT_CONFIRMED,
            f"Payment confirmed for order {order_number}",
            metadata={"orderId": str(_id(order_id)), "creatorEarnings": _amount(earnings)},
        )

    async def order_cancelled(self, user_id, order_id, order_number: str):
        await self.log(
            AccountRole.USER, user_id, ORDER_CANCELLED,
            f"Order cancelled: {order_number}",
            metadata={"orderId": str(_id(order_id))},
        )

    async def order_transition(self, creator_id, order_id, action: str, client: Optional[ClientInfo] = None):
        verb = action.split("_", 1)[1].lower()
        await self.log(
            AccountRole.CREATOR, creator_id, action,
            f"Order {verb}: {_id(order_id)}", client,
            metadata={"orderId": str(_id(order_id))},
        )

    async def withdrawal_requested(self, creator_id, withdrawal_id, amount, client: Optional[ClientInfo] = None):
        await self.log(
            AccountRole.CREATOR, creator_id, WITHDRAWAL_REQUESTED,
            f"Withdrawal requested: ${_amount(amount)}", client,
            metadata={"withdrawalId": str(_id(withdrawal_id)), "amount": _amount(amount)},
        )

    async def admin_action(
        self,
        admin_id,
        action: str,
        description: str,
        metadata: Optional[Dict[str, Any]] = None,
        client: Optional[ClientInfo] = None,
    ):
        await self.log(AccountRole.ADMIN, admin_id, action, description, client, metadata=metadata)
