"""Authentication routes for all three principal types"""

from fastapi import APIRouter, Depends, status

from ...api.dependencies import get_activity_logger, get_bot_verifier, get_client_info, get_unit_of_work
from ...application.dtos.account_dtos import AdminLoginDto, BootstrapAdminDto, LoginDto, RegisterDto
from ...application.services.activity_logger import ActivityLogger, ClientInfo
from ...application.use_cases.auth_use_cases import (
    AdminLoginUseCase, BootstrapAdminUseCase, LoginAccountUseCase, RegisterAccountUseCase
)
from ...domain.enums import AccountRole
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.bot_verification_service import BotVerificationService

router = APIRouter()


async def _register(role, request, unit_of_work, bot_verifier, activity_logger, client):
    use_case = RegisterAccountUseCase(unit_of_work, bot_verifier, activity_logger)
    result = await use_case.execute(role, request, client)
    return {
        "success": True,
        "message": f"{role.value.capitalize()} registered successfully",
        role.value: result.account.dump(),
        "token": result.token,
    }


async def _login(role, request, unit_of_work, bot_verifier, activity_logger, client):
    use_case = LoginAccountUseCase(unit_of_work, bot_verifier, activity_logger)
    result = await use_case.execute(role, request, client)
    return {
        "success": True,
        "message": "Login successful",
        role.value: result.account.dump(),
        "token": result.token,
    }


@router.post("/auth/register", status_code=status.HTTP_201_CREATED)
async def register_user(
    request: RegisterDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerificationService = Depends(get_bot_verifier),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Register a buyer account"""
    return await _register(AccountRole.USER, request, unit_of_work, bot_verifier, activity_logger, client)


@router.post("/auth/login")
async def login_user(
    request: LoginDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerificationService = Depends(get_bot_verifier),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Login buyer"""
    return await _login(AccountRole.USER, request, unit_of_work, bot_verifier, activity_logger, client)


@router.post("/creators/register", status_code=status.HTTP_201_CREATED)
async def register_creator(
    request: RegisterDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerificationService = Depends(get_bot_verifier),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Register a creator account"""
    return await _register(AccountRole.CREATOR, request, unit_of_work, bot_verifier, activity_logger, client)


@router.post("/creators/login")
async def login_creator(
    request: LoginDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    bot_verifier: BotVerificationService = Depends(get_bot_verifier),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Login creator"""
    return await _login(AccountRole.CREATOR, request, unit_of_work, bot_verifier, activity_logger, client)


@router.post("/admin/login")
async def login_admin(
    request: AdminLoginDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Login admin. Never creates accounts."""
    result = await AdminLoginUseCase(unit_of_work, activity_logger).execute(request, client)
    return {"success": True, "message": "Login successful", "admin": result.account.dump(), "token": result.token}


@router.post("/admin/bootstrap", status_code=status.HTTP_201_CREATED)
async def bootstrap_admin(
    request: BootstrapAdminDto,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    activity_logger: ActivityLogger = Depends(get_activity_logger),
    client: ClientInfo = Depends(get_client_info)
):
    """Create the first admin account; refused once one exists"""
    result = await BootstrapAdminUseCase(unit_of_work, activity_logger).execute(request, client)
    return {
        "success": True,
        "message": "Admin account created",
        "admin": result.account.dump(),
        "token": result.token,
    }
