from pydantic import BaseModel, Field

from .base import NullAsDefaultModel
from .filesystem import Filesystem, LocalFsConfig
from .folder import VirtualFolder


class PatternsFilter(NullAsDefaultModel):
    path: str = ""
    allowed_patterns: list[str] = []
    denied_patterns: list[str] = []


class ExtensionsFilter(NullAsDefaultModel):
    path: str = ""
    allowed_extensions: list[str] = []
    denied_extensions: list[str] = []


class UserFilters(NullAsDefaultModel):
    allowed_ip: list[str] = []
    denied_ip: list[str] = []
    denied_login_methods: list[str] = []
    denied_protocols: list[str] = []
    file_patterns: list[PatternsFilter] = []
    file_extensions: list[ExtensionsFilter] = []
    max_upload_file_size: int = 0


class User(BaseModel):
    """Current in-memory representation of an account."""

    id: int = 0
    status: int = 0
    username: str
    expiration_date: int = 0
    password: str = ""
    public_keys: list[str] = []
    home_dir: str = ""
    virtual_folders: list[VirtualFolder] = []
    uid: int = 0
    gid: int = 0
    max_sessions: int = 0
    quota_size: int = 0
    quota_files: int = 0
    permissions: dict[str, list[str]] = {}
    used_quota_size: int = 0
    used_quota_files: int = 0
    last_quota_update: int = 0
    upload_bandwidth: int = 0
    download_bandwidth: int = 0
    last_login: int = 0
    filters: UserFilters = Field(default_factory=UserFilters)
    filesystem: Filesystem = Field(default_factory=LocalFsConfig)
