"""Runtime configuration for skill_dispatch.

Configuration is a small Pydantic model that can be built directly or
read from environment variables:

- ``SKILL_DISPATCH_LOG_LEVEL``: trace, debug, info, warn or error
- ``SKILL_DISPATCH_HANDLER_CONFIG``: path to a handler chain YAML file
- ``SKILL_DISPATCH_ENV``: environment name (development, test, production)

Example:
    >>> config = DispatchConfig.from_env()
    >>> configure_logging(config)
    >>> if config.handler_config_path:
    ...     mapper = mapper_from_yaml(config.handler_config_path)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from .exceptions import MapperConfigurationError

ENV_LOG_LEVEL = "SKILL_DISPATCH_LOG_LEVEL"
ENV_HANDLER_CONFIG = "SKILL_DISPATCH_HANDLER_CONFIG"
ENV_ENVIRONMENT = "SKILL_DISPATCH_ENV"


class DispatchConfig(BaseModel):
    """Configuration for request dispatch.

    Example:
        >>> config = DispatchConfig(log_level="debug")
        >>> config.environment
        'development'
    """

    log_level: str = Field(
        default="info",
        pattern="^(trace|debug|info|warn|error)$",
        description="Log level (trace, debug, info, warn, error).",
    )
    handler_config_path: Path | None = Field(
        default=None,
        description="Path to a YAML file declaring request handler chains.",
    )
    environment: str = Field(
        default="development",
        description="Current environment (development, test, production).",
    )

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> DispatchConfig:
        """Build configuration from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            The validated configuration.

        Raises:
            MapperConfigurationError: If a variable holds an invalid value.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if env.get(ENV_LOG_LEVEL):
            values["log_level"] = env[ENV_LOG_LEVEL].strip().lower()
        if env.get(ENV_HANDLER_CONFIG):
            values["handler_config_path"] = Path(env[ENV_HANDLER_CONFIG])
        if env.get(ENV_ENVIRONMENT):
            values["environment"] = env[ENV_ENVIRONMENT]

        try:
            return cls(**values)
        except ValidationError as e:
            raise MapperConfigurationError(f"Invalid dispatch configuration: {e}") from e

    def is_test_environment(self) -> bool:
        """Return True when running under the test environment."""
        return self.environment == "test"


__all__ = [
    "DispatchConfig",
    "ENV_LOG_LEVEL",
    "ENV_HANDLER_CONFIG",
    "ENV_ENVIRONMENT",
]
