"""Tests for client module."""

import asyncio
import json
import os
from datetime import timedelta
from unittest.mock import patch

import httpx
import pytest
from helpers import TEST_BASE_URL, chat_payload, json_response

from bigmodel_python.client import (
    CHAT_COMPLETIONS_PATH,
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    IMAGE_GENERATIONS_PATH,
    Client,
    ClientBuilder,
    parse_duration,
    with_base_url,
    with_path,
    with_proxy,
    with_timeout,
    with_timeout_string,
    with_transport,
)
from bigmodel_python.errors import (
    ConfigurationError,
    DecodeError,
    EmptyBodyError,
    RemoteError,
    RequestTimeoutError,
    TransportError,
)
from bigmodel_python.types import ChatCompletionRequest, ChatCompletionResponse, ChatMessage


class TestClientDefaults:
    """Tests for Client construction."""

    def test_defaults(self) -> None:
        """Test documented defaults."""
        client = Client("k")
        assert client.base_url == DEFAULT_BASE_URL
        assert client.base_url == "https://open.bigmodel.cn/api/"
        assert client.path == CHAT_COMPLETIONS_PATH
        assert client.timeout == DEFAULT_TIMEOUT == 300.0

    def test_empty_token_rejected(self) -> None:
        """Test empty auth token."""
        with pytest.raises(ConfigurationError) as exc_info:
            Client("")
        assert "auth token is empty" in str(exc_info.value)

    def test_negative_timeout_rejected(self) -> None:
        """Test negative timeout option."""
        with pytest.raises(ConfigurationError):
            Client("k", with_timeout(-1))

    def test_zero_timeout_allowed(self) -> None:
        """Test zero disables the deadline."""
        assert Client("k", with_timeout(0)).timeout == 0.0

    def test_timedelta_timeout(self) -> None:
        """Test timedelta is converted to seconds."""
        assert Client("k", with_timeout(timedelta(minutes=2))).timeout == 120.0

    def test_options_applied_in_order(self) -> None:
        """Test later options win."""
        client = Client("k", with_timeout(10), with_timeout(20))
        assert client.timeout == 20.0

    def test_base_url_gets_trailing_slash(self) -> None:
        """Test trailing slash is appended."""
        client = Client("k", with_base_url("https://example.com/api"))
        assert client.base_url == "https://example.com/api/"
        assert client.url_for("paas/v4/x") == "https://example.com/api/paas/v4/x"

    def test_empty_base_url_rejected(self) -> None:
        """Test empty base URL."""
        with pytest.raises(ConfigurationError):
            Client("k", with_base_url(""))

    def test_path_override(self) -> None:
        """Test path override wins over capability defaults."""
        client = Client("k", with_path("custom/path"))
        assert client.path == "custom/path"
        assert client.resolve_path(IMAGE_GENERATIONS_PATH) == "custom/path"

    def test_empty_path_restores_default(self) -> None:
        """Test empty path resets to the capability default."""
        client = Client("k", with_path("custom"), with_path(""))
        assert client.path == CHAT_COMPLETIONS_PATH
        assert client.resolve_path(IMAGE_GENERATIONS_PATH) == IMAGE_GENERATIONS_PATH

    def test_none_transport_rejected(self) -> None:
        """Test None transport."""
        with pytest.raises(ConfigurationError):
            Client("k", with_transport(None))  # type: ignore[arg-type]

    def test_proxy_recorded(self) -> None:
        """Test proxy option."""
        assert Client("k", with_proxy("http://proxy:8080")).config.proxy == "http://proxy:8080"

    def test_config_is_a_copy(self) -> None:
        """Test config cannot be mutated through the property."""
        client = Client("k")
        client.config.timeout = 1.0
        assert client.timeout == DEFAULT_TIMEOUT


class TestParseDuration:
    """Tests for duration strings."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("5s", 5.0),
            ("2m", 120.0),
            ("1h30m", 5400.0),
            ("250ms", 0.25),
            ("1.5h", 5400.0),
            ("0", 0.0),
            ("-2s", -2.0),
            ("+3s", 3.0),
            ("100us", 0.0001),
        ],
    )
    def test_valid(self, value: str, expected: float) -> None:
        """Test valid durations."""
        assert parse_duration(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["", "5", "abc", "5x", "1h 30m", "s"])
    def test_invalid(self, value: str) -> None:
        """Test invalid durations."""
        with pytest.raises(ConfigurationError):
            parse_duration(value)

    def test_timeout_string_option(self) -> None:
        """Test the timeout string option."""
        assert Client("k", with_timeout_string("90s")).timeout == 90.0

    def test_negative_timeout_string_rejected(self) -> None:
        """Test negative duration string."""
        with pytest.raises(ConfigurationError):
            Client("k", with_timeout_string("-1s"))


class TestClientBuilder:
    """Tests for ClientBuilder."""

    def test_build_with_explicit_key(self) -> None:
        """Test fluent configuration."""
        client = (
            ClientBuilder()
            .api_key("k")
            .base_url("https://example.com")
            .timeout_string("1m")
            .path("x/y")
            .build()
        )
        assert client.base_url == "https://example.com/"
        assert client.timeout == 60.0
        assert client.path == "x/y"

    def test_env_key_fallback(self) -> None:
        """Test BIGMODEL_API_KEY is used without an explicit key."""
        with patch.dict(os.environ, {"BIGMODEL_API_KEY": "env-key"}):
            client = ClientBuilder().build()
        assert client.config.auth_token == "env-key"

    def test_missing_key(self) -> None:
        """Test no key anywhere."""
        with patch.dict(os.environ, {}, clear=True):
            with pytest.raises(ConfigurationError):
                ClientBuilder().build()

    def test_defaults_are_overridable(self) -> None:
        """Test builder defaults apply before user options."""
        builder = ClientBuilder(default_path=IMAGE_GENERATIONS_PATH, default_timeout=30)
        assert builder.api_key("k").build().path == IMAGE_GENERATIONS_PATH
        client = (
            ClientBuilder(default_path=IMAGE_GENERATIONS_PATH, default_timeout=30)
            .api_key("k")
            .timeout(5)
            .path("other")
            .build()
        )
        assert client.timeout == 5.0
        assert client.path == "other"


class TestClientRequest:
    """Tests for request sending."""

    @pytest.mark.asyncio
    async def test_headers_and_body(self, make_client, requests_seen) -> None:
        """Test auth, user agent and JSON body."""
        client = make_client(lambda request: json_response(chat_payload()))
        request = ChatCompletionRequest(
            model="glm-4-flash", messages=[ChatMessage.user("你好 <b>&</b>")]
        )

        result = await client.send("POST", "paas/v4/chat/completions", ChatCompletionResponse, body=request)

        assert result.content == "Hello!"
        sent = requests_seen[0]
        assert sent.method == "POST"
        assert str(sent.url) == TEST_BASE_URL + "paas/v4/chat/completions"
        assert sent.headers["Authorization"] == "Bearer test-key"
        assert sent.headers["Content-Type"] == "application/json"
        assert sent.headers["User-Agent"].startswith("bigmodel-python/")
        assert "你好 <b>&</b>" in sent.content.decode("utf-8")
        assert json.loads(sent.content) == {
            "model": "glm-4-flash",
            "messages": [{"role": "user", "content": "你好 <b>&</b>"}],
        }

    @pytest.mark.asyncio
    async def test_error_status_raises_remote_error(self, make_client) -> None:
        """Test status >= 400."""
        body = {"error": {"code": "1211", "message": "模型不存在"}}
        client = make_client(lambda request: json_response(body, status_code=400))

        with pytest.raises(RemoteError) as exc_info:
            await client.request("POST", "paas/v4/chat/completions")

        error = exc_info.value
        assert isinstance(error, TransportError)
        assert error.status_code == 400
        assert error.code == "1211"
        assert "模型不存在" in str(error)

    @pytest.mark.asyncio
    async def test_empty_success_body_is_decode_error(self, make_client) -> None:
        """Test empty 200 body."""
        client = make_client(lambda request: httpx.Response(200, content=b""))

        with pytest.raises(EmptyBodyError) as exc_info:
            await client.send("POST", "p", ChatCompletionResponse)

        assert isinstance(exc_info.value, DecodeError)
        assert "error decoding response" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_connect_error_translated(self, make_client) -> None:
        """Test network failures become TransportError."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        client = make_client(handler)
        with pytest.raises(TransportError) as exc_info:
            await client.request("GET", "p")
        assert "request failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_deadline_expiry(self, make_client) -> None:
        """Test the client deadline bounds the call."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return json_response(chat_payload())

        client = make_client(handler, with_timeout(0.05))
        with pytest.raises(RequestTimeoutError) as exc_info:
            await client.request("POST", "p")
        assert isinstance(exc_info.value, TransportError)
        assert exc_info.value.timeout == 0.05

    @pytest.mark.asyncio
    async def test_per_call_timeout_override(self, make_client) -> None:
        """Test a per-call deadline overrides the client's."""

        async def handler(request: httpx.Request) -> httpx.Response:
            await asyncio.sleep(5)
            return json_response(chat_payload())

        client = make_client(handler)
        with pytest.raises(RequestTimeoutError):
            await client.request("POST", "p", timeout=0.05)

    @pytest.mark.asyncio
    async def test_default_transport_released(self) -> None:
        """Test aclose releases the lazily created httpx client."""
        async with Client("k") as client:
            transport = client.transport
            assert isinstance(transport, httpx.AsyncClient)
        assert transport.is_closed
