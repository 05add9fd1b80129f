"""API dependencies: principals, unit of work and external services"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ..application.services.activity_logger import ActivityLogger, ClientInfo
from ..core.security import verify_token
from ..db.database import get_db
from ..domain.entities.account import Account
from ..domain.enums import AccountRole
from ..domain.repositories.unit_of_work import IUnitOfWork
from ..domain.value_objects.entity_ids import AccountId
from ..infrastructure.external_services.bot_verification_service import BotVerificationService
from ..infrastructure.external_services.payment_service import PaymentService
from ..infrastructure.external_services.storage_service import StorageService
from ..infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl


# auto_error=False so a missing header is a 401, not FastAPI's default 403
security = HTTPBearer(auto_error=False)


def get_unit_of_work(db: Session = Depends(get_db)) -> IUnitOfWork:
    """Get unit of work"""
    return UnitOfWorkImpl(db)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
) -> Account:
    """Resolve the bearer token to an account of the role named in the token"""
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required")

    claims = verify_token(credentials.credentials)
    if not claims:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    try:
        account_id = AccountId.from_str(claims["sub"])
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    async with unit_of_work:
        account = await unit_of_work.accounts.get_by_id(account_id)

    if not account or account.role.value != claims["type"]:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    return account


def _require(role: AccountRole, message: str):
    async def dependency(principal: Account = Depends(get_current_principal)) -> Account:
        if principal.role != role:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=message)
        return principal
    return dependency


require_user = _require(AccountRole.USER, "User access required")
require_creator = _require(AccountRole.CREATOR, "Creator access required")
require_admin = _require(AccountRole.ADMIN, "Admin access required")


def get_client_info(request: Request) -> ClientInfo:
    """Client address as reported by the edge proxy, falling back to the socket"""
    headers = request.headers
    forwarded = headers.get("x-forwarded-for")
    ip_address = (
        headers.get("cf-connecting-ip")
        or (forwarded.split(",")[0].strip() if forwarded else None)
        or headers.get("x-real-ip")
        or "unknown"
    )
    return ClientInfo(ip_address=ip_address, user_agent=headers.get("user-agent", "unknown"))


def get_payment_service() -> PaymentService:
    """Get payment service"""
    return PaymentService()


def get_storage_service() -> StorageService:
    """Get storage service"""
    return StorageService()


def get_bot_verifier() -> BotVerificationService:
    return BotVerificationService()


def get_activity_logger() -> ActivityLogger:
    return ActivityLogger()
