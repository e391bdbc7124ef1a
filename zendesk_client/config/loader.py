"""YAML configuration loading."""

import hashlib
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from zendesk_client.config.models import ClientConfig


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


def _format_errors(error: ValidationError) -> list[dict[str, str]]:
    return [
        {
            "loc": ".".join(str(part) for part in item["loc"]),
            "msg": item["msg"],
            "type": item["type"],
        }
        for item in error.errors()
    ]


def load_client_config(path: Path) -> ClientConfig:
    """Load and validate a client configuration file.

    Args:
        path: Path to a YAML mapping of `ClientConfig` fields.

    Returns:
        Validated configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If YAML parsing fails.
        ConfigValidationError: If the content is not a valid configuration.
    """
    content = path.read_bytes()
    log = logger.bind(
        component="config",
        path=str(path),
        checksum=hashlib.sha256(content).hexdigest(),
    )

    parsed = yaml.safe_load(content.decode("utf-8")) or {}
    if not isinstance(parsed, dict):
        errors = [{"loc": "", "msg": "top level must be a mapping", "type": "type"}]
        log.warning("config_invalid", errors=errors)
        raise ConfigValidationError(errors, str(path))

    try:
        config = ClientConfig.model_validate(parsed)
    except ValidationError as e:
        errors = _format_errors(e)
        log.warning("config_invalid", errors=errors)
        raise ConfigValidationError(errors, str(path)) from e

    log.info("config_loaded", remote_uri=config.remote_uri, oauth=config.oauth)
    return config
