"""Pydantic configuration models for basichttp."""

import os
import re
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "Python Basic HTTP Client 1.0"

_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def expand_env_var(value: Optional[str]) -> Optional[str]:
    """Expand environment variable references in a string.

    Supports $VAR and ${VAR} syntax. References to unset variables are
    left untouched.
    """
    if value is None:
        return None

    def replace(match: re.Match) -> str:
        var_name = match.group(1) or match.group(2)
        return os.environ.get(var_name, match.group(0))

    return _ENV_VAR_PATTERN.sub(replace, value)


class ClientConfig(BaseModel):
    """
    Defaults applied to every request built with this configuration.

    Example:
        config = ClientConfig(user_agent="my-app/1.0", read_timeout=60)
        request = Request(config=config)

    YAML format:
        user_agent: my-app/1.0
        connect_timeout: 5
        read_timeout: 60
        verify_peer: true
    """

    user_agent: str = Field(DEFAULT_USER_AGENT, description="User-Agent header sent with requests")
    connect_timeout: float = Field(10, ge=1, description="Connection timeout in seconds")
    read_timeout: float = Field(30, ge=1, description="Read timeout in seconds")
    verify_peer: bool = Field(True, description="Verify TLS certificates for HTTPS transports")
    ca_bundle: Optional[Path] = Field(None, description="CA bundle used for TLS verification")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "WARNING",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")

    model_config = {"extra": "forbid"}

    @property
    def timeout(self) -> tuple[float, float]:
        """(connect, read) timeout pair as understood by requests."""
        return (self.connect_timeout, self.read_timeout)

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClientConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClientConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text())
