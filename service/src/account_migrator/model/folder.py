from .base import NullAsDefaultModel


class BaseVirtualFolder(NullAsDefaultModel):
    id: int = 0
    mapped_path: str = ""
    used_quota_size: int = 0
    used_quota_files: int = 0
    last_quota_update: int = 0
    users: list[str] = []


class VirtualFolder(BaseVirtualFolder):
    """A folder mapped into a user's virtual path with its own quota."""

    virtual_path: str = ""
    quota_size: int = 0
    quota_files: int = 0
