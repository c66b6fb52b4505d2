class MigrationError(Exception):
    pass


class InitializationError(MigrationError):
    pass


class UnsupportedVersionError(MigrationError):
    def __init__(self, version) -> None:
        super().__init__(f"unsupported legacy format version: {version!r}")
        self.version = version


class LegacyFormatError(MigrationError):
    pass


class DecodeError(MigrationError):
    """Raised when a legacy encoded secret cannot be decoded."""


class SecretResolutionError(MigrationError):
    """A legacy secret could not be turned into a current Secret.

    Carries the credential file path (if a file was involved), the owning
    username and field name, and the underlying error.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        username: str = "",
        field_name: str = "",
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.username = username
        self.field_name = field_name
        self.cause = cause
