"""basichttp configuration models."""

from .config import DEFAULT_USER_AGENT, ClientConfig, expand_env_var

__all__ = ["ClientConfig", "DEFAULT_USER_AGENT", "expand_env_var"]
