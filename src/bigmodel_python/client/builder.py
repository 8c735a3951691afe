"""
Fluent builder for Client instances.
"""

from __future__ import annotations

import os
from datetime import timedelta
from typing import TYPE_CHECKING

from bigmodel_python.client.core import Client
from bigmodel_python.client.options import (
    Option,
    with_base_url,
    with_path,
    with_proxy,
    with_timeout,
    with_timeout_string,
    with_transport,
)
from bigmodel_python.errors import ConfigurationError

if TYPE_CHECKING:
    from bigmodel_python.transport import HTTPDoer

API_KEY_ENV = "BIGMODEL_API_KEY"


class ClientBuilder:
    """Builder for creating Client instances.

    Setters record options in call order; build() applies them to a new
    Client after the builder defaults. Without an explicit key the
    BIGMODEL_API_KEY environment variable is used.

    Example:
        >>> client = (
        ...     ClientBuilder()
        ...     .api_key("your-key")
        ...     .timeout_string("90s")
        ...     .build()
        ... )
    """

    def __init__(
        self,
        default_path: str | None = None,
        default_timeout: float | None = None,
    ) -> None:
        """Initialize the builder.

        Args:
            default_path: Path used unless path() overrides it
            default_timeout: Deadline in seconds used unless timeout() overrides it
        """
        self._default_path = default_path
        self._default_timeout = default_timeout
        self._api_key: str | None = None
        self._options: list[Option] = []

    def api_key(self, key: str) -> ClientBuilder:
        """Set explicit API key.

        Args:
            key: API key

        Returns:
            Self for chaining
        """
        self._api_key = key
        return self

    def base_url(self, url: str) -> ClientBuilder:
        """Override base URL.

        Args:
            url: Base URL for API requests

        Returns:
            Self for chaining
        """
        self._options.append(with_base_url(url))
        return self

    def timeout(self, timeout: float | timedelta) -> ClientBuilder:
        """Set the call deadline in seconds or as a timedelta.

        Returns:
            Self for chaining
        """
        self._options.append(with_timeout(timeout))
        return self

    def timeout_string(self, value: str) -> ClientBuilder:
        """Set the call deadline from a duration string such as "2m".

        Returns:
            Self for chaining
        """
        self._options.append(with_timeout_string(value))
        return self

    def path(self, path: str) -> ClientBuilder:
        """Override the request path.

        Returns:
            Self for chaining
        """
        self._options.append(with_path(path))
        return self

    def transport(self, transport: HTTPDoer) -> ClientBuilder:
        """Use a custom HTTP transport.

        Returns:
            Self for chaining
        """
        self._options.append(with_transport(transport))
        return self

    def proxy(self, proxy: str) -> ClientBuilder:
        """Route the default transport through a proxy.

        Returns:
            Self for chaining
        """
        self._options.append(with_proxy(proxy))
        return self

    def option(self, option: Option) -> ClientBuilder:
        """Append a raw option.

        Returns:
            Self for chaining
        """
        self._options.append(option)
        return self

    def build(self) -> Client:
        """Build the client.

        Returns:
            Configured Client

        Raises:
            ConfigurationError: If no API key is available or an option fails
        """
        key = self._api_key or os.getenv(API_KEY_ENV, "")
        if not key:
            raise ConfigurationError("auth token is empty", option="auth_token").with_hint(
                f"call api_key() or set {API_KEY_ENV}"
            )
        defaults: list[Option] = []
        if self._default_path:
            defaults.append(with_path(self._default_path))
        if self._default_timeout is not None:
            defaults.append(with_timeout(self._default_timeout))
        return Client(key, *defaults, *self._options)
