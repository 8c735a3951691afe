"""配置加载：环境变量与 YAML 文件。

Client settings from the environment and YAML files.

Environment variables:
    BIGMODEL_API_KEY: API key
    BIGMODEL_BASE_URL: Base URL
    BIGMODEL_TIMEOUT: Call deadline, seconds ("90") or duration ("1m30s")
    BIGMODEL_PATH: Request path override
    BIGMODEL_PROXY: Proxy URL for the default transport
    BIGMODEL_CONFIG: YAML file read by ClientSettings.load()

A YAML file holds the same keys in lower case::

    api_key: your-key
    base_url: https://open.bigmodel.cn/api/
    timeout: 90s
"""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

from bigmodel_python.client.core import Client
from bigmodel_python.client.options import (
    Option,
    parse_duration,
    with_base_url,
    with_path,
    with_proxy,
    with_timeout,
)
from bigmodel_python.errors import ConfigurationError

CONFIG_ENV = "BIGMODEL_CONFIG"

_ENV_KEYS = {
    "api_key": "BIGMODEL_API_KEY",
    "base_url": "BIGMODEL_BASE_URL",
    "timeout": "BIGMODEL_TIMEOUT",
    "path": "BIGMODEL_PATH",
    "proxy": "BIGMODEL_PROXY",
}


@dataclass
class ClientSettings:
    """Settings a Client can be built from.

    Unset fields keep the client defaults.

    Example:
        >>> settings = ClientSettings.load("bigmodel.yaml")
        >>> async with settings.create_client() as client:
        ...     ...
    """

    api_key: str | None = None
    base_url: str | None = None
    timeout: float | str | None = None
    path: str | None = None
    proxy: str | None = None

    @classmethod
    def from_env(cls) -> ClientSettings:
        """Read settings from BIGMODEL_* environment variables."""
        values = {name: os.getenv(env) or None for name, env in _ENV_KEYS.items()}
        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ClientSettings:
        """Read settings from a YAML mapping.

        Raises:
            ConfigurationError: If the file cannot be read or is not a mapping
        """
        file = Path(path)
        try:
            content = yaml.safe_load(file.read_text(encoding="utf-8"))
        except OSError as e:
            raise ConfigurationError(f"cannot read config file {file}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"invalid YAML in {file}: {e}") from e

        if content is None:
            return cls()
        if not isinstance(content, dict):
            raise ConfigurationError(
                f"config file {file} must hold a mapping, got {type(content).__name__}"
            )

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(content) - known)
        if unknown:
            raise ConfigurationError(
                f"unknown keys in {file}: {', '.join(map(str, unknown))}"
            ).with_hint(f"valid keys are {', '.join(sorted(known))}")
        return cls(**{k: v for k, v in content.items() if v is not None})

    @classmethod
    def load(cls, path: str | Path | None = None) -> ClientSettings:
        """Layer environment variables over a YAML file.

        Args:
            path: YAML file; defaults to $BIGMODEL_CONFIG, and no file if unset
        """
        path = path or os.getenv(CONFIG_ENV)
        base = cls.from_yaml(path) if path else cls()
        return base.merge(cls.from_env())

    def merge(self, other: ClientSettings) -> ClientSettings:
        """Return a copy with every field set in ``other`` taking precedence."""
        values: dict[str, Any] = {}
        for f in fields(self):
            override = getattr(other, f.name)
            values[f.name] = override if override is not None else getattr(self, f.name)
        return ClientSettings(**values)

    def timeout_seconds(self) -> float | None:
        """Timeout in seconds, parsing duration strings.

        Raises:
            ConfigurationError: If the value is not a number or duration
        """
        if self.timeout is None or isinstance(self.timeout, (int, float)):
            return self.timeout
        text = str(self.timeout).strip()
        try:
            return float(text)
        except ValueError:
            return parse_duration(text)

    def options(self) -> list[Option]:
        """Client options for every set field except the API key."""
        opts: list[Option] = []
        if self.base_url:
            opts.append(with_base_url(self.base_url))
        timeout = self.timeout_seconds()
        if timeout is not None:
            opts.append(with_timeout(timeout))
        if self.path:
            opts.append(with_path(self.path))
        if self.proxy:
            opts.append(with_proxy(self.proxy))
        return opts

    def create_client(self, *extra: Option) -> Client:
        """Build a Client; ``extra`` options are applied last.

        Raises:
            ConfigurationError: If no API key is set or an option fails
        """
        return Client(self.api_key or "", *self.options(), *extra)
