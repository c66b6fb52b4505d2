from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class SecretStatus(StrEnum):
    NONE = ""
    PLAIN = "Plain"
    AES_256_GCM = "AES-256-GCM"
    SECRETBOX = "Secretbox"
    GCP = "GCP"
    AWS = "AWS"
    VAULT_TRANSIT = "VaultTransit"
    REDACTED = "Redacted"


class Secret(BaseModel):
    """Current representation of a sensitive value.

    Convention for status field:
    - NONE: no value was ever set, payload is empty
    - PLAIN: payload holds the clear text value
    - any other status: payload is protected by the named KMS backend

    The payload keeps the exact bytes of the value and is written as base64
    in JSON.
    """

    model_config = ConfigDict(ser_json_bytes="base64", val_json_bytes="base64")

    status: SecretStatus = SecretStatus.NONE
    payload: bytes = b""
    key: str = ""
    additional_data: str = ""
    mode: int = 0

    @staticmethod
    def empty() -> "Secret":
        return Secret()

    @staticmethod
    def plain(payload: str | bytes) -> "Secret":
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        return Secret(status=SecretStatus.PLAIN, payload=payload)

    def is_empty(self) -> bool:
        return self.status == SecretStatus.NONE

    def is_plain(self) -> bool:
        return self.status == SecretStatus.PLAIN

    def is_encrypted(self) -> bool:
        return self.status not in (SecretStatus.NONE, SecretStatus.PLAIN, SecretStatus.REDACTED)
