"""Buyer profile routes"""

from fastapi import APIRouter, Depends

from ...api.dependencies import get_storage_service, get_unit_of_work, require_user
from ...application.dtos.account_dtos import AvatarUpdateDto, PasswordChangeDto, ProfileUpdateDto, UploadUrlRequestDto
from ...application.use_cases.account_use_cases import (
    ChangePasswordUseCase, GetProfileUseCase, RequestUploadUrlUseCase, UpdateAvatarUseCase, UpdateProfileUseCase
)
from ...domain.entities.account import Account
from ...domain.enums import UploadPurpose
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.storage_service import StorageService

router = APIRouter()


@router.get("/me")
async def get_profile(
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Get current user profile"""
    profile = await GetProfileUseCase(unit_of_work).execute(current_user.id)
    return {"success": True, "user": profile.dump()}


@router.put("/me")
async def update_profile(
    request: ProfileUpdateDto,
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    profile = await UpdateProfileUseCase(unit_of_work).execute(current_user.id, request)
    return {"success": True, "message": "Profile updated successfully", "user": profile.dump()}


@router.put("/me/password")
async def change_password(
    request: PasswordChangeDto,
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    await ChangePasswordUseCase(unit_of_work).execute(current_user.id, request)
    return {"success": True, "message": "Password updated successfully"}


@router.post("/me/avatar/upload-url")
async def avatar_upload_url(
    request: UploadUrlRequestDto,
    current_user: Account = Depends(require_user),
    storage_service: StorageService = Depends(get_storage_service)
):
    """Presigned PUT for a new avatar image"""
    ticket = await RequestUploadUrlUseCase(storage_service).execute(
        current_user.id, UploadPurpose.AVATAR, request.content_type
    )
    return {"success": True, "uploadUrl": ticket.upload_url, "fileKey": ticket.file_key}


@router.put("/me/avatar")
async def set_avatar(
    request: AvatarUpdateDto,
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    avatar = await UpdateAvatarUseCase(unit_of_work, storage_service).execute(current_user.id, request.file_key)
    return {"success": True, "message": "Avatar updated successfully", "avatar": avatar}


@router.delete("/me/avatar")
async def remove_avatar(
    current_user: Account = Depends(require_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    await UpdateAvatarUseCase(unit_of_work, storage_service).execute(current_user.id, None)
    return {"success": True, "message": "Avatar removed successfully"}
