"""客户端配置项：以函数组合的方式构建客户端配置。

Client configuration options.

A Client is built from an ordered list of options. Each option is a
callable that mutates a draft ClientConfig and may raise
ConfigurationError; the config is read-only once the client exists.

Example:
    >>> client = Client(
    ...     api_key,
    ...     with_base_url("https://open.bigmodel.cn/api"),
    ...     with_timeout_string("90s"),
    ... )
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Callable

from bigmodel_python.errors import ConfigurationError

if TYPE_CHECKING:
    from bigmodel_python.transport import HTTPDoer

DEFAULT_BASE_URL = "https://open.bigmodel.cn/api/"
DEFAULT_TIMEOUT = 300.0

# Endpoint paths, relative to the base URL
CHAT_COMPLETIONS_PATH = "paas/v4/chat/completions"
ASYNC_CHAT_COMPLETIONS_PATH = "paas/v4/async/chat/completions"
ASYNC_RESULT_PATH = "paas/v4/async-result/"
IMAGE_GENERATIONS_PATH = "paas/v4/images/generations"
VIDEO_GENERATIONS_PATH = "paas/v4/videos/generations"
AUDIO_TRANSCRIPTIONS_PATH = "paas/v4/audio/transcriptions"
AUDIO_SPEECH_PATH = "paas/v4/audio/speech"

DEFAULT_PATH = CHAT_COMPLETIONS_PATH


@dataclass
class ClientConfig:
    """Resolved client configuration.

    Attributes:
        auth_token: API key sent as a bearer token
        base_url: Base URL, always ending with "/"
        path: Request path override; None means the capability default
        timeout: Deadline for a whole call in seconds; 0 disables it
        transport: Custom HTTP transport, or None for the default httpx client
        proxy: Proxy URL for the default transport
    """

    auth_token: str
    base_url: str = DEFAULT_BASE_URL
    path: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    transport: HTTPDoer | None = None
    proxy: str | None = None


Option = Callable[[ClientConfig], None]


def with_base_url(url: str) -> Option:
    """Set the base URL; a trailing "/" is appended when missing."""

    def apply(config: ClientConfig) -> None:
        if not url:
            raise ConfigurationError("base URL is empty", option="base_url")
        config.base_url = url if url.endswith("/") else url + "/"

    return apply


def with_timeout(timeout: float | timedelta) -> Option:
    """Set the call deadline.

    Args:
        timeout: Seconds, or a timedelta; 0 means no deadline

    Raises:
        ConfigurationError: If the timeout is negative
    """

    def apply(config: ClientConfig) -> None:
        seconds = timeout.total_seconds() if isinstance(timeout, timedelta) else float(timeout)
        if seconds < 0:
            raise ConfigurationError(
                f"timeout must be a non-negative duration, got {seconds}s",
                option="timeout",
            )
        config.timeout = seconds

    return apply


def with_timeout_string(value: str) -> Option:
    """Set the call deadline from a duration string such as "90s" or "1h30m".

    Raises:
        ConfigurationError: If the string cannot be parsed or is negative
    """

    def apply(config: ClientConfig) -> None:
        with_timeout(parse_duration(value))(config)

    return apply


def with_path(path: str) -> Option:
    """Override the request path; an empty string restores the default."""

    def apply(config: ClientConfig) -> None:
        config.path = path or None

    return apply


def with_transport(transport: HTTPDoer) -> Option:
    """Use a custom HTTP transport, e.g. an httpx.AsyncClient with a MockTransport."""

    def apply(config: ClientConfig) -> None:
        if transport is None:
            raise ConfigurationError("transport is None", option="transport")
        config.transport = transport

    return apply


def with_proxy(proxy: str) -> Option:
    """Route the default transport through a proxy."""

    def apply(config: ClientConfig) -> None:
        config.proxy = proxy or None

    return apply


_DURATION_UNITS: dict[str, float] = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}

_DURATION_PART = re.compile(r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> float:
    """Parse a duration string into seconds.

    Accepts a signed sequence of decimal numbers, each with a unit suffix,
    e.g. "300ms", "-1.5h", "2h45m". Valid units are "ns", "us" (or "µs"),
    "ms", "s", "m", "h". "0" is accepted without a unit.

    Args:
        value: Duration string

    Returns:
        Duration in seconds

    Raises:
        ConfigurationError: If the string is not a valid duration
    """
    text = value.strip()
    sign = 1.0
    if text[:1] in ("+", "-"):
        if text[0] == "-":
            sign = -1.0
        text = text[1:]

    if text == "0":
        return 0.0
    if not text:
        raise ConfigurationError(f"invalid duration {value!r}", option="timeout")

    total = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_PART.match(text, pos)
        if match is None:
            raise ConfigurationError(
                f"invalid duration {value!r}",
                option="timeout",
            ).with_hint('use a number with a unit, e.g. "30s", "5m", "1h30m"')
        number, unit = match.groups()
        total += float(number) * _DURATION_UNITS[unit]
        pos = match.end()

    return sign * total
