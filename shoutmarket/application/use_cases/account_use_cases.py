"""Self-service profile, password and file upload use cases"""

import logging
from dataclasses import dataclass
from typing import Optional

from ...core.errors import NotFoundError, UpstreamError, ValidationError
from ...core.security import get_password_hash, verify_password
from ...domain.entities.account import Account
from ...domain.enums import UploadPurpose
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import AccountId
from ...infrastructure.external_services.storage_service import StorageService, build_upload_key
from ..dtos.account_dtos import AccountDto, PasswordChangeDto, ProfileUpdateDto

logger = logging.getLogger(__name__)


async def load_account(unit_of_work: IUnitOfWork, account_id: AccountId) -> Account:
    account = await unit_of_work.accounts.get_by_id(account_id)
    if not account:
        raise NotFoundError("Account not found")
    return account


class GetProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, account_id: AccountId) -> AccountDto:
        async with self.unit_of_work:
            return AccountDto.from_entity(await load_account(self.unit_of_work, account_id))


class UpdateProfileUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, account_id: AccountId, request: ProfileUpdateDto) -> AccountDto:
        async with self.unit_of_work:
            account = await load_account(self.unit_of_work, account_id)

            if request.display_name and request.display_name != account.display_name:
                taken = await self.unit_of_work.accounts.exists_by_display_name(
                    request.display_name, account.role, exclude_id=account.id
                )
                if taken:
                    raise ValidationError("Display name already taken")

            if request.bio is not None and not account.is_creator:
                raise ValidationError("Only creators have a bio")

            account.update_profile(
                first_name=request.first_name,
                last_name=request.last_name,
                display_name=request.display_name,
                country=request.country,
                bio=request.bio,
            )
            await self.unit_of_work.accounts.update(account)
            await self.unit_of_work.commit()

            return AccountDto.from_entity(account)


class ChangePasswordUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, account_id: AccountId, request: PasswordChangeDto) -> None:
        async with self.unit_of_work:
            account = await load_account(self.unit_of_work, account_id)
            if not verify_password(request.current_password, account.hashed_password):
                raise ValidationError("Current password is incorrect")

            account.change_password(get_password_hash(request.new_password))
            await self.unit_of_work.accounts.update(account)
            await self.unit_of_work.commit()

        logger.info("Password changed for %s %s", account.role.value, account.id)


@dataclass
class UploadTicket:
    upload_url: str
    file_key: str


class RequestUploadUrlUseCase:
    """Hand out a presigned PUT for a fresh, owner-scoped key"""

    def __init__(self, storage_service: StorageService):
        self.storage_service = storage_service

    async def execute(
        self,
        owner_id: AccountId,
        purpose: Optional[UploadPurpose],
        content_type: Optional[str]
    ) -> UploadTicket:
        if not content_type:
            raise ValidationError("Content type is required")
        if purpose is None:
            raise ValidationError("Invalid upload purpose")

        key = build_upload_key(purpose, str(owner_id), content_type)
        url = await self.storage_service.get_signed_upload_url(key, content_type)
        return UploadTicket(upload_url=url, file_key=key)


class UpdateAvatarUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, storage_service: StorageService):
        self.unit_of_work = unit_of_work
        self.storage_service = storage_service

    async def execute(self, account_id: AccountId, file_key: Optional[str]) -> Optional[str]:
        """Point the avatar at ``file_key`` (``None`` clears it) and return the stored key"""
        if file_key is not None and not file_key.startswith(f"avatars/{account_id}/"):
            raise ValidationError("Invalid file key")

        async with self.unit_of_work:
            account = await load_account(self.unit_of_work, account_id)
            previous = account.set_avatar(file_key)
            await self.unit_of_work.accounts.update(account)
            await self.unit_of_work.commit()

        if previous and previous != file_key:
            await self._discard(previous)
        return file_key

    async def _discard(self, key: str) -> None:
        # The row already points elsewhere; an orphaned object is acceptable
        try:
            await self.storage_service.delete_file(key)
        except UpstreamError:
            logger.warning("Could not delete old avatar %s", key)
