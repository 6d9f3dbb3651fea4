"""
Environment configuration loading.

The process environment is overlaid with the entries of a ``.env`` file and
frozen into an :class:`EnvConfig` that is passed explicitly to whoever needs
it. ``os.environ`` is never modified.
"""
from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Mapping
from pathlib import Path

from dotenv import dotenv_values

from splitter_deploy.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = ".env"


class EnvConfig(Mapping[str, str]):
    """Read-only key/value configuration source."""

    def __init__(self, values: Mapping[str, str | None] | None = None):
        # dotenv_values yields None for bare keys ("KEY" with no "=")
        self._values: dict[str, str] = {
            k: v for k, v in (values or {}).items() if v is not None
        }

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"EnvConfig(<{len(self._values)} keys>)"

    def require(self, *keys: str) -> list[str]:
        """Return the values for ``keys``, in order.

        Raises:
            ConfigurationError: Listing every key that is missing or empty.
        """
        missing = [k for k in keys if not self._values.get(k, "").strip()]
        if missing:
            raise ConfigurationError(
                f"Missing configuration values: {', '.join(missing)}",
                hint="Set them in your .env file or the process environment",
            )
        return [self._values[k] for k in keys]


def load_env_config(
    path: str | Path | None = DEFAULT_ENV_FILE,
    *,
    environ: Mapping[str, str] | None = None,
) -> EnvConfig:
    """Build an :class:`EnvConfig` from the environment and a ``.env`` file.

    Entries from the file override the process environment. A missing file
    is not an error; the environment alone is used.
    """
    values: dict[str, str | None] = dict(os.environ if environ is None else environ)
    if path:
        env_path = Path(path)
        if env_path.is_file():
            file_values = dotenv_values(env_path)
            logger.debug("Loaded %d entries from %s", len(file_values), env_path)
            values.update(file_values)
        else:
            logger.debug("No env file at %s; using process environment only", env_path)
    return EnvConfig(values)
