"""
Transport layer - pluggable HTTP transport.

Provides the HTTPDoer protocol, the default httpx client and header
construction.
"""

from bigmodel_python.transport.http import (
    HTTPDoer,
    build_headers,
    create_http_client,
    send_request,
)

__all__ = [
    "HTTPDoer",
    "build_headers",
    "create_http_client",
    "send_request",
]
