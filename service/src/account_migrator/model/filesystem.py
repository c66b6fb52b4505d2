from enum import IntEnum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Discriminator, Field, Tag

from .secret import Secret


class FilesystemProvider(IntEnum):
    LOCAL = 0
    S3 = 1
    GCS = 2
    AZURE_BLOB = 3


class LocalFsConfig(BaseModel):
    provider: Literal[FilesystemProvider.LOCAL] = FilesystemProvider.LOCAL


class S3FsConfig(BaseModel):
    provider: Literal[FilesystemProvider.S3] = FilesystemProvider.S3
    bucket: str = ""
    key_prefix: str = ""
    region: str = ""
    access_key: str = ""
    access_secret: Secret = Field(default_factory=Secret)
    endpoint: str = ""
    storage_class: str = ""
    upload_part_size: int = 0
    upload_concurrency: int = 0


class GCSFsConfig(BaseModel):
    provider: Literal[FilesystemProvider.GCS] = FilesystemProvider.GCS
    bucket: str = ""
    key_prefix: str = ""
    credential_file: str = Field(default="", exclude=True)
    credentials: Secret = Field(default_factory=Secret)
    automatic_credentials: int = 0
    storage_class: str = ""


class AzBlobFsConfig(BaseModel):
    provider: Literal[FilesystemProvider.AZURE_BLOB] = FilesystemProvider.AZURE_BLOB
    container: str = ""
    account_name: str = ""
    account_key: Secret = Field(default_factory=Secret)
    endpoint: str = ""
    sas_url: str = ""
    key_prefix: str = ""
    upload_part_size: int = 0
    upload_concurrency: int = 0
    use_emulator: bool = False
    access_tier: str = ""


class UnknownFsConfig(BaseModel):
    """Provider value that this release does not know, kept as written."""

    provider: int


UNKNOWN_PROVIDER_TAG = "unknown"


def _provider_tag(value) -> str:
    provider = value.get("provider", 0) if isinstance(value, dict) else getattr(value, "provider", 0)
    try:
        return FilesystemProvider(provider).name
    except ValueError:
        return UNKNOWN_PROVIDER_TAG


# Only the config of the selected provider exists, selected by `provider`
Filesystem = Annotated[
    Union[
        Annotated[LocalFsConfig, Tag(FilesystemProvider.LOCAL.name)],
        Annotated[S3FsConfig, Tag(FilesystemProvider.S3.name)],
        Annotated[GCSFsConfig, Tag(FilesystemProvider.GCS.name)],
        Annotated[AzBlobFsConfig, Tag(FilesystemProvider.AZURE_BLOB.name)],
        Annotated[UnknownFsConfig, Tag(UNKNOWN_PROVIDER_TAG)],
    ],
    Discriminator(_provider_tag),
]
