from __future__ import annotations

import pytest

from shoutmarket.core.errors import ValidationError
from shoutmarket.domain.enums import UploadPurpose
from shoutmarket.infrastructure.external_services.storage_service import build_upload_key


def test_avatar_key_is_scoped_to_owner() -> None:
    key = build_upload_key(UploadPurpose.AVATAR, "owner-1", "image/jpeg")

    assert key.startswith("avatars/owner-1/")
    assert key.endswith(".jpeg")


def test_delivery_key_uses_deliveries_folder() -> None:
    key = build_upload_key(UploadPurpose.DELIVERY, "creator-9", "video/mp4")

    assert key.startswith("deliveries/creator-9/")
    assert key.endswith(".mp4")


def test_keys_are_unique() -> None:
    first = build_upload_key(UploadPurpose.DELIVERY, "c", "video/mp4")
    second = build_upload_key(UploadPurpose.DELIVERY, "c", "video/mp4")

    assert first != second


@pytest.mark.parametrize(
    "purpose, content_type, message",
    [
        (UploadPurpose.AVATAR, None, "Content type is required"),
        (UploadPurpose.AVATAR, "", "Content type is required"),
        (UploadPurpose.AVATAR, "video/mp4", "Unsupported file format"),
        (UploadPurpose.DELIVERY, "application/zip", "Unsupported file format"),
    ],
)
def test_rejected_uploads(purpose: UploadPurpose, content_type, message: str) -> None:
    with pytest.raises(ValidationError) as excinfo:
        build_upload_key(purpose, "owner", content_type)

    assert excinfo.value.message == message
