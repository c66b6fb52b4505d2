import logging
from pathlib import Path

from pydantic import BaseModel, ValidationError

from .errors import InitializationError

logger = logging.getLogger(__name__)


class MigrationConfig(BaseModel):
    # Directory holding "<username>_gcs_credentials.json" files
    credentials_dir: Path = Path("credentials")

    @staticmethod
    def from_json(file: str | Path) -> "MigrationConfig":
        file = Path(file)

        try:
            content = file.read_text(encoding="utf-8")
            config = MigrationConfig.model_validate_json(content)

        except (OSError, ValidationError) as e:
            msg = f"failed to load config from {str(file)}"
            logger.error(msg)
            if isinstance(e, ValidationError):
                logger.error(e.errors())
            raise InitializationError(msg) from e

        else:
            if not config.credentials_dir.is_absolute():
                config.credentials_dir = file.parent / config.credentials_dir
            return config
