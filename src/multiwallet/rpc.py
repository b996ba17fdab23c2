"""
Minimal async JSON-RPC 2.0 client for public chain endpoints.
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from multiwallet.errors import RpcError

DEFAULT_RPC_TIMEOUT = 30.0


class JsonRpcClient:
    """
    JSON-RPC over HTTP POST.

    One instance per endpoint. The underlying httpx client is created lazily
    so that constructing a client never touches the network.
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_RPC_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._request_id = 0

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, transport=self._transport)
        return self._client

    async def call(self, method: str, params: list | None = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name
            params: Method parameters

        Returns:
            The ``result`` member of the response

        Raises:
            RpcError: If the response carries an error object
            httpx.HTTPError: On connection/timeout/HTTP status errors
        """
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params or [],
        }

        try:
            response = await self.client.post(self.url, json=payload)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            logger.error(f"RPC call timed out: {method} - {e}")
            raise
        except httpx.HTTPError as e:
            logger.error(f"RPC call failed: {method} - {e}")
            raise

        if data.get("error"):
            error_info = data["error"]
            if isinstance(error_info, dict):
                raise RpcError(
                    error_info.get("code", "unknown"), error_info.get("message", str(error_info))
                )
            raise RpcError("unknown", str(error_info))

        logger.debug(f"RPC {method} ok (id={self._request_id})")
        return data.get("result")

    async def close(self) -> None:
        """Close the HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
