"""
Migration of account records from older data format versions.
"""

from .converter import (
    AccountConverter,
    BackupConversionResult,
    ConversionFailure,
    convert_fs_config_from_v4,
    convert_user,
    convert_user_from_v2,
    convert_user_from_v4,
    gcs_credentials_path,
)

__all__ = [
    'AccountConverter',
    'BackupConversionResult',
    'ConversionFailure',
    'convert_fs_config_from_v4',
    'convert_user',
    'convert_user_from_v2',
    'convert_user_from_v4',
    'gcs_credentials_path',
]
