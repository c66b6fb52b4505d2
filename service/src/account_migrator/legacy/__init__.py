"""
Read-only models of account records written by older releases.

Every shape mirrors the on-disk JSON of its format version, including fields
that were later renamed or removed.
"""

import logging

from pydantic import ValidationError

from ..errors import LegacyFormatError, UnsupportedVersionError
from .v2 import LegacyUserV2
from .v4 import (
    LegacyAzBlobConfigV4,
    LegacyBackupV4,
    LegacyFilesystemV4,
    LegacyGCSConfigV4,
    LegacyS3ConfigV4,
    LegacyUserV4,
)

logger = logging.getLogger(__name__)

LegacyUser = LegacyUserV2 | LegacyUserV4

_USER_MODELS: dict[int, type[LegacyUserV2] | type[LegacyUserV4]] = {
    2: LegacyUserV2,
    4: LegacyUserV4,
}


def parse_legacy_user(data: dict, version: int) -> LegacyUser:
    """Build the legacy user shape for an explicit format version.

    Raises:
        UnsupportedVersionError: If no shape exists for `version`
        LegacyFormatError: If `data` does not fit the shape
    """
    model = _USER_MODELS.get(version)
    if model is None:
        raise UnsupportedVersionError(version)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        msg = f"failed to parse v{version} user record"
        logger.error(msg)
        logger.error(e.errors())
        raise LegacyFormatError(msg) from e


def parse_legacy_backup_v4(data: dict) -> LegacyBackupV4:
    try:
        return LegacyBackupV4.model_validate(data)
    except ValidationError as e:
        msg = "failed to parse v4 backup"
        logger.error(msg)
        logger.error(e.errors())
        raise LegacyFormatError(msg) from e


__all__ = [
    "LegacyAzBlobConfigV4",
    "LegacyBackupV4",
    "LegacyFilesystemV4",
    "LegacyGCSConfigV4",
    "LegacyS3ConfigV4",
    "LegacyUser",
    "LegacyUserV2",
    "LegacyUserV4",
    "parse_legacy_backup_v4",
    "parse_legacy_user",
]
