import base64
import binascii
from typing import Annotated

from pydantic import BeforeValidator, ConfigDict, Field, PlainSerializer, field_validator

from ..model.base import NullAsDefaultModel
from ..model.folder import BaseVirtualFolder, VirtualFolder
from ..model.user import UserFilters


def _decode_base64(value):
    # byte slices were written as standard base64 strings
    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except binascii.Error as e:
            raise ValueError(f"invalid base64 data: {e}") from e
    return value


LegacyBytes = Annotated[
    bytes,
    BeforeValidator(_decode_base64),
    PlainSerializer(lambda v: base64.b64encode(v).decode("ascii"), return_type=str, when_used="json"),
]

_LEGACY_CONFIG = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class LegacyS3ConfigV4(NullAsDefaultModel):
    model_config = _LEGACY_CONFIG

    bucket: str = ""
    key_prefix: str = ""
    region: str = ""
    access_key: str = ""
    access_secret: str = ""  # "$aes$..." encoded string
    endpoint: str = ""
    storage_class: str = ""
    upload_part_size: int = 0
    upload_concurrency: int = 0


class LegacyGCSConfigV4(NullAsDefaultModel):
    model_config = _LEGACY_CONFIG

    bucket: str = ""
    key_prefix: str = ""
    # Not part of the serialized format, only set programmatically
    credential_file: str = Field(default="", exclude=True)
    credentials: LegacyBytes = b""
    automatic_credentials: int = 0
    storage_class: str = ""


class LegacyAzBlobConfigV4(NullAsDefaultModel):
    model_config = _LEGACY_CONFIG

    container: str = ""
    account_name: str = ""
    account_key: str = ""  # "$aes$..." encoded string
    endpoint: str = ""
    sas_url: str = ""
    key_prefix: str = ""
    upload_part_size: int = 0
    upload_concurrency: int = 0
    use_emulator: bool = False
    access_tier: str = ""


class LegacyFilesystemV4(NullAsDefaultModel):
    """Filesystem config as written by format version 4.

    All provider blocks are always present, only the one selected by
    `provider` carries meaning.
    """

    model_config = _LEGACY_CONFIG

    provider: int = 0
    s3_config: LegacyS3ConfigV4 = Field(default_factory=LegacyS3ConfigV4, alias="s3config")
    gcs_config: LegacyGCSConfigV4 = Field(default_factory=LegacyGCSConfigV4, alias="gcsconfig")
    azblob_config: LegacyAzBlobConfigV4 = Field(
        default_factory=LegacyAzBlobConfigV4, alias="azblobconfig"
    )


class LegacyUserV4(NullAsDefaultModel):
    """Account as written by format version 4."""

    model_config = _LEGACY_CONFIG

    id: int = 0
    status: int = 0
    username: str = ""
    expiration_date: int = 0
    password: str = ""
    public_keys: tuple[str, ...] = ()
    home_dir: str = ""
    virtual_folders: tuple[VirtualFolder, ...] = ()
    uid: int = 0
    gid: int = 0
    max_sessions: int = 0
    quota_size: int = 0
    quota_files: int = 0
    permissions: dict[str, tuple[str, ...]] = {}
    used_quota_size: int = 0
    used_quota_files: int = 0
    last_quota_update: int = 0
    upload_bandwidth: int = 0
    download_bandwidth: int = 0
    last_login: int = 0
    filters: UserFilters = Field(default_factory=UserFilters)
    filesystem: LegacyFilesystemV4 = Field(default_factory=LegacyFilesystemV4)

    @field_validator("permissions", mode="before")
    @classmethod
    def _null_permissions(cls, value):
        if isinstance(value, dict):
            return {path: () if perms is None else perms for path, perms in value.items()}
        return value


class LegacyBackupV4(NullAsDefaultModel):
    model_config = _LEGACY_CONFIG

    users: tuple[LegacyUserV4, ...] = ()
    folders: tuple[BaseVirtualFolder, ...] = ()
