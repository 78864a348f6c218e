"""Environment driven settings for the Lambda handler."""

import logging
import os
from dataclasses import dataclass

from .constants import DEFAULT_CALLBACK_TIMEOUT, DEFAULT_LOG_LEVEL

_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


@dataclass(frozen=True)
class Settings:
    callback_timeout: float = DEFAULT_CALLBACK_TIMEOUT
    log_level: str = DEFAULT_LOG_LEVEL
    secrets_manager_endpoint: str | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Return settings read from the process environment.

        Raises:
            RuntimeError: If a variable holds an invalid value.
        """
        timeout_str = os.environ.get("CALLBACK_TIMEOUT", str(DEFAULT_CALLBACK_TIMEOUT))
        try:
            timeout = float(timeout_str)
        except ValueError as exc:
            raise RuntimeError("CALLBACK_TIMEOUT must be a number") from exc
        if timeout <= 0:
            raise RuntimeError("CALLBACK_TIMEOUT must be positive")

        level = os.environ.get("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
        if level not in _LEVELS:
            raise RuntimeError(
                "LOG_LEVEL must be one of " + ", ".join(sorted(_LEVELS))
            )

        endpoint = os.environ.get("SECRETS_MANAGER_ENDPOINT") or None
        return cls(
            callback_timeout=timeout,
            log_level=level,
            secrets_manager_endpoint=endpoint,
        )

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the root logger.

        The Lambda runtime installs its own handler, so only the level is set
        when one is already present.
        """
        root = logging.getLogger()
        if not root.handlers:
            logging.basicConfig(format="%(levelname)s %(name)s %(message)s")
        root.setLevel(self.log_level)
