from pydantic import ConfigDict

from ..model.base import NullAsDefaultModel


class LegacyUserV2(NullAsDefaultModel):
    """Account as written by format version 2.

    Flat record: no filesystem config, no virtual folders, no filters and a
    single permission list that applies to the whole home directory.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int = 0
    username: str = ""
    password: str = ""
    public_keys: tuple[str, ...] = ()
    home_dir: str = ""
    uid: int = 0
    gid: int = 0
    max_sessions: int = 0
    quota_size: int = 0
    quota_files: int = 0
    permissions: tuple[str, ...] = ()
    used_quota_size: int = 0
    used_quota_files: int = 0
    last_quota_update: int = 0
    upload_bandwidth: int = 0
    download_bandwidth: int = 0
    expiration_date: int = 0
    last_login: int = 0
    status: int = 0
