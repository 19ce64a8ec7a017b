"""
Minimal JSON-RPC client used to probe the node.
"""

import json
import logging
from typing import Any

import requests


class RpcError(Exception):
    """Raised when an RPC call does not yield a usable result."""

    def __init__(self, error: dict):
        self.code = error.get("code")
        self.message = error.get("message")
        self.data = error.get("data")
        super().__init__(f"RPC Error {self.code}: {self.message}")


class JsonRpcClient:
    """
    JSON-RPC 2.0 client over HTTP.

    Supports attribute-style method calls:
        rpc.eth_blockNumber()

    A reply counts as a result only if its envelope carries a ``result`` key,
    even when the value itself is ``null``.
    """

    def __init__(
        self,
        url: str,
        name: str | None = None,
        timeout: float = 30,
        session: requests.Session | None = None,
    ):
        self.url = url
        self.name = name or url
        self.timeout = timeout
        self.id_counter = 0
        self.session = session or requests.Session()
        self.logger = logging.getLogger(f"rpc.{self.name}")

    def __getattr__(self, method: str):
        if method.startswith("_"):
            raise AttributeError(method)

        def rpc_call(*params):
            return self._call(method, params)

        return rpc_call

    def _call(self, method: str, params: tuple) -> Any:
        """
        Make a JSON-RPC call.

        Raises:
            RpcError: If the reply is an error envelope, is not JSON or has no result
            requests.RequestException: If the HTTP request fails
        """
        self.id_counter += 1

        payload = {
            "jsonrpc": "2.0",
            "id": self.id_counter,
            "method": method,
            "params": list(params),
        }

        self.logger.debug(f"RPC call: {method}({params})")

        resp = self.session.post(self.url, json=payload, timeout=self.timeout)
        resp.raise_for_status()

        try:
            result = resp.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise RpcError({"code": -1, "message": f"Invalid JSON: {e}"}) from e

        if not isinstance(result, dict):
            raise RpcError({"code": -1, "message": f"Unexpected reply: {result!r}"})

        if "error" in result:
            error = result["error"]
            if not isinstance(error, dict):
                error = {"code": -1, "message": str(error)}
            raise RpcError(error)

        if "result" not in result:
            raise RpcError({"code": -1, "message": "Reply carries no result"})

        return result["result"]

    def call(self, method: str, *params) -> Any:
        """
        Explicit call method (alternative to attribute style).

        Usage:
            rpc.call("eth_blockNumber")
        """
        return self._call(method, params)
