"""Registration, login and admin bootstrap"""

import logging
from typing import Optional

from ...core.errors import AuthError, StateConflictError, ValidationError
from ...core.security import create_access_token, get_password_hash, verify_password
from ...core.config import settings
from ...db.database import SessionLocal
from ...domain.entities.account import Account
from ...domain.enums import AccountRole
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.bot_verification_service import BotVerificationService
from ...infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from ..dtos.account_dtos import AccountDto, AdminLoginDto, AuthResponseDto, BootstrapAdminDto, LoginDto, RegisterDto
from ..services.activity_logger import ADMIN_ACCOUNT_CREATED, ActivityLogger, ClientInfo

logger = logging.getLogger(__name__)


def issue_token(account: Account) -> str:
    return create_access_token(str(account.id.value), account.role.value, account.email)


class RegisterAccountUseCase:
    """Self-registration for buyers (``user``) and sellers (``creator``)"""

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        bot_verifier: BotVerificationService,
        activity_logger: ActivityLogger
    ):
        self.unit_of_work = unit_of_work
        self.bot_verifier = bot_verifier
        self.activity_logger = activity_logger

    async def execute(self, role: AccountRole, request: RegisterDto, client: ClientInfo) -> AuthResponseDto:
        if not await self.bot_verifier.verify(request.turnstile_token, client.ip_address):
            raise ValidationError("Turnstile verification failed")

        async with self.unit_of_work:
            accounts = self.unit_of_work.accounts
            if await accounts.exists_by_email(request.email, role):
                raise ValidationError("Email already registered")
            if await accounts.exists_by_display_name(request.display_name, role):
                raise ValidationError("Display name already taken")

            account = Account.register(
                role=role,
                email=request.email,
                hashed_password=get_password_hash(request.password),
                first_name=request.first_name,
                last_name=request.last_name,
                display_name=request.display_name,
                date_of_birth=request.date_of_birth,
                country=request.country,
                commission_rate=settings.DEFAULT_COMMISSION_RATE,
            )
            await accounts.add(account)
            await self.unit_of_work.commit()

        logger.info("Registered %s %s", role.value, account.id)
        await self.activity_logger.registration(role, account.id, account.email, client)
        return AuthResponseDto(account=AccountDto.from_entity(account), token=issue_token(account))


class LoginAccountUseCase:

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        bot_verifier: BotVerificationService,
        activity_logger: ActivityLogger
    ):
        self.unit_of_work = unit_of_work
        self.bot_verifier = bot_verifier
        self.activity_logger = activity_logger

    async def execute(self, role: AccountRole, request: LoginDto, client: ClientInfo) -> AuthResponseDto:
        if not await self.bot_verifier.verify(request.turnstile_token, client.ip_address):
            raise ValidationError("Turnstile verification failed")

        async with self.unit_of_work:
            account = await self.unit_of_work.accounts.get_by_email(request.email, role)

        if not account or not verify_password(request.password, account.hashed_password):
            raise AuthError("Invalid credentials")

        await self.activity_logger.login(role, account.id, account.email, client)
        return AuthResponseDto(account=AccountDto.from_entity(account), token=issue_token(account))


class AdminLoginUseCase:
    """Credential check only; admins are never created here"""

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def execute(self, request: AdminLoginDto, client: ClientInfo) -> AuthResponseDto:
        async with self.unit_of_work:
            admin = await self.unit_of_work.accounts.get_by_email(request.email, AccountRole.ADMIN)

        if not admin or not verify_password(request.password, admin.hashed_password):
            raise AuthError("Invalid credentials")

        await self.activity_logger.login(AccountRole.ADMIN, admin.id, admin.email, client)
        return AuthResponseDto(account=AccountDto.from_entity(admin), token=issue_token(admin))


class BootstrapAdminUseCase:
    """Create the first admin. Refuses once any admin exists."""

    def __init__(self, unit_of_work: IUnitOfWork, activity_logger: ActivityLogger):
        self.unit_of_work = unit_of_work
        self.activity_logger = activity_logger

    async def execute(self, request: BootstrapAdminDto, client: Optional[ClientInfo] = None) -> AuthResponseDto:
        async with self.unit_of_work:
            if await self.unit_of_work.accounts.count_by_role(AccountRole.ADMIN) > 0:
                raise StateConflictError("An admin account already exists")

            admin = Account.create_admin(
                email=request.email,
                hashed_password=get_password_hash(request.password),
                first_name=request.first_name,
                last_name=request.last_name,
            )
            await self.unit_of_work.accounts.add(admin)
            await self.unit_of_work.commit()

        logger.info("Bootstrapped admin account %s", admin.email)
        await self.activity_logger.admin_action(
            admin.id, ADMIN_ACCOUNT_CREATED, "First admin account created", client=client
        )
        return AuthResponseDto(account=AccountDto.from_entity(admin), token=issue_token(admin))


async def bootstrap_admin(
    email: str,
    password: str,
    first_name: str = "Admin",
    last_name: str = "User",
    session_factory=SessionLocal,
) -> Optional[AccountDto]:
    """Provision the first admin outside HTTP. Returns None if one already exists."""
    session = session_factory()
    try:
        use_case = BootstrapAdminUseCase(UnitOfWorkImpl(session), ActivityLogger(session_factory))
        request = BootstrapAdminDto(email=email, password=password, first_name=first_name, last_name=last_name)
        try:
            result = await use_case.execute(request)
        except StateConflictError:
            logger.info("Admin bootstrap skipped: an admin already exists")
            return None
        return result.account
    finally:
        session.close()
