"""
Conversion of legacy account records into the current User model.

Version 2 records are flat and map field by field. Version 4 records also
carry a filesystem config whose provider-specific secrets are resolved through
`account_migrator.secrets`.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from ..config import MigrationConfig
from ..errors import MigrationError, SecretResolutionError
from ..legacy import LegacyBackupV4, LegacyFilesystemV4, LegacyUser, LegacyUserV2, LegacyUserV4
from ..model.filesystem import (
    AzBlobFsConfig,
    Filesystem,
    FilesystemProvider,
    GCSFsConfig,
    LocalFsConfig,
    S3FsConfig,
    UnknownFsConfig,
)
from ..model.folder import BaseVirtualFolder
from ..model.user import User
from ..secrets import (
    CredentialFileReader,
    SecretDecoder,
    decode_legacy_secret,
    read_credential_file,
    resolve_secret,
)

logger = logging.getLogger(__name__)

GCS_CREDENTIALS_SUFFIX = "_gcs_credentials.json"


def gcs_credentials_path(credentials_dir: str | Path, username: str) -> str:
    """Conventional location of a user's GCS credential file."""
    return str(Path(credentials_dir) / f"{username}{GCS_CREDENTIALS_SUFFIX}")


def convert_user_from_v2(user: LegacyUserV2) -> User:
    """Map a v2 record; its flat permission list applies to the home root."""
    return User(
        id=user.id,
        status=user.status,
        username=user.username,
        expiration_date=user.expiration_date,
        password=user.password,
        public_keys=list(user.public_keys),
        home_dir=user.home_dir,
        uid=user.uid,
        gid=user.gid,
        max_sessions=user.max_sessions,
        quota_size=user.quota_size,
        quota_files=user.quota_files,
        permissions={"/": list(user.permissions)},
        used_quota_size=user.used_quota_size,
        used_quota_files=user.used_quota_files,
        last_quota_update=user.last_quota_update,
        upload_bandwidth=user.upload_bandwidth,
        download_bandwidth=user.download_bandwidth,
        last_login=user.last_login,
        filesystem=LocalFsConfig(),
    )


def convert_fs_config_from_v4(
    fs: LegacyFilesystemV4,
    username: str,
    *,
    credentials_dir: str | Path,
    read_file: CredentialFileReader = read_credential_file,
    decode: SecretDecoder = decode_legacy_secret,
) -> Filesystem:
    """Translate the block selected by `fs.provider`, ignoring the others.

    Raises:
        SecretResolutionError: If a secret of the selected provider cannot be
            resolved. The error is logged with the username before raising.
    """
    try:
        if fs.provider == FilesystemProvider.S3:
            s3 = fs.s3_config
            return S3FsConfig(
                bucket=s3.bucket,
                key_prefix=s3.key_prefix,
                region=s3.region,
                access_key=s3.access_key,
                access_secret=resolve_secret(
                    encoded=s3.access_secret,
                    decode=decode,
                    username=username,
                    field_name="access_secret",
                ),
                endpoint=s3.endpoint,
                storage_class=s3.storage_class,
                upload_part_size=s3.upload_part_size,
                upload_concurrency=s3.upload_concurrency,
            )

        if fs.provider == FilesystemProvider.AZURE_BLOB:
            az = fs.azblob_config
            return AzBlobFsConfig(
                container=az.container,
                account_name=az.account_name,
                account_key=resolve_secret(
                    encoded=az.account_key,
                    decode=decode,
                    username=username,
                    field_name="account_key",
                ),
                endpoint=az.endpoint,
                sas_url=az.sas_url,
                key_prefix=az.key_prefix,
                upload_part_size=az.upload_part_size,
                upload_concurrency=az.upload_concurrency,
                use_emulator=az.use_emulator,
                access_tier=az.access_tier,
            )

        if fs.provider == FilesystemProvider.GCS:
            gcs = fs.gcs_config
            credential_file = gcs.credential_file
            if gcs.automatic_credentials == 0 and not gcs.credentials:
                credential_file = gcs_credentials_path(credentials_dir, username)
            return GCSFsConfig(
                bucket=gcs.bucket,
                key_prefix=gcs.key_prefix,
                credential_file=gcs.credential_file,
                credentials=resolve_secret(
                    plain=gcs.credentials,
                    credential_file=credential_file,
                    read_file=read_file,
                    username=username,
                    field_name="credentials",
                ),
                automatic_credentials=gcs.automatic_credentials,
                storage_class=gcs.storage_class,
            )

    except SecretResolutionError as e:
        logger.error(f"unable to convert v4 filesystem for user '{username}': {e}")
        raise

    if fs.provider == FilesystemProvider.LOCAL:
        return LocalFsConfig()

    logger.warning(f"Unknown filesystem provider {fs.provider} for user '{username}', keeping it as is")
    return UnknownFsConfig(provider=fs.provider)


def convert_user_from_v4(
    user: LegacyUserV4,
    *,
    credentials_dir: str | Path,
    read_file: CredentialFileReader = read_credential_file,
    decode: SecretDecoder = decode_legacy_secret,
) -> User:
    filesystem = convert_fs_config_from_v4(
        user.filesystem,
        user.username,
        credentials_dir=credentials_dir,
        read_file=read_file,
        decode=decode,
    )
    return User(
        id=user.id,
        status=user.status,
        username=user.username,
        expiration_date=user.expiration_date,
        password=user.password,
        public_keys=list(user.public_keys),
        home_dir=user.home_dir,
        virtual_folders=[f.model_copy(deep=True) for f in user.virtual_folders],
        uid=user.uid,
        gid=user.gid,
        max_sessions=user.max_sessions,
        quota_size=user.quota_size,
        quota_files=user.quota_files,
        permissions={path: list(perms) for path, perms in user.permissions.items()},
        used_quota_size=user.used_quota_size,
        used_quota_files=user.used_quota_files,
        last_quota_update=user.last_quota_update,
        upload_bandwidth=user.upload_bandwidth,
        download_bandwidth=user.download_bandwidth,
        last_login=user.last_login,
        filters=user.filters.model_copy(deep=True),
        filesystem=filesystem,
    )


def convert_user(
    user: LegacyUser,
    config: MigrationConfig,
    *,
    read_file: CredentialFileReader = read_credential_file,
    decode: SecretDecoder = decode_legacy_secret,
) -> User:
    """Convert a legacy record of any supported version."""
    if isinstance(user, LegacyUserV4):
        logger.debug(f"Converting v4 user '{user.username}'")
        return convert_user_from_v4(
            user, credentials_dir=config.credentials_dir, read_file=read_file, decode=decode
        )

    if isinstance(user, LegacyUserV2):
        logger.debug(f"Converting v2 user '{user.username}'")
        return convert_user_from_v2(user)

    raise TypeError(f"not a legacy user record: {type(user).__name__}")


class ConversionFailure(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    username: str
    error: MigrationError


class BackupConversionResult(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    users: list[User] = []
    folders: list[BaseVirtualFolder] = []
    failures: list[ConversionFailure] = []

    @property
    def ok(self) -> bool:
        return not self.failures


class AccountConverter:
    """Converts legacy records using one set of collaborators.

    Convert records one at a time with `convert`, or a whole v4 backup with
    `convert_backup`.
    """

    def __init__(
        self,
        config: MigrationConfig,
        read_file: CredentialFileReader | None = None,
        decode: SecretDecoder | None = None,
    ):
        self.config: MigrationConfig = config
        self.read_file: CredentialFileReader = read_file or read_credential_file
        self.decode: SecretDecoder = decode or decode_legacy_secret

    def convert(self, user: LegacyUser) -> User:
        return convert_user(user, self.config, read_file=self.read_file, decode=self.decode)

    def convert_backup(
        self, backup: LegacyBackupV4, stop_on_error: bool = False
    ) -> BackupConversionResult:
        """Convert every user of a v4 backup independently.

        Failed users are collected in `failures` unless `stop_on_error` is
        set, in which case the first failure is raised.
        """
        result = BackupConversionResult(
            folders=[f.model_copy(deep=True) for f in backup.folders]
        )

        for legacy_user in backup.users:
            try:
                result.users.append(self.convert(legacy_user))
            except MigrationError as e:
                if stop_on_error:
                    raise
                result.failures.append(ConversionFailure(username=legacy_user.username, error=e))

        logger.info(
            f"Converted {len(result.users)} of {len(backup.users)} users "
            f"and {len(result.folders)} folders from v4 backup"
        )
        return result
