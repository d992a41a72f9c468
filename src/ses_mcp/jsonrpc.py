# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""JSON-RPC 2.0 envelopes and error codes.

Requests are parsed into :class:`RpcRequest`; every reply is built through
:func:`make_result` or :func:`make_error` so that a response always carries
``jsonrpc`` and ``id`` plus exactly one of ``result`` or ``error``.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, StrictStr

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

RequestId = Union[StrictStr, StrictInt, StrictFloat, None]


class RpcRequest(BaseModel):
    """Inbound envelope. Unknown members are tolerated and dropped."""

    model_config = ConfigDict(extra="ignore")

    jsonrpc: Any = None
    method: Any = None
    params: Any = None
    id: RequestId = None


class RpcError(BaseModel):
    """``error`` member of a response envelope."""

    code: int
    message: str
    data: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, omitting ``data`` when it is unset."""
        payload: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


def make_result(request_id: Any, result: Any) -> Dict[str, Any]:
    """Return a success envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "result": result, "id": request_id}


def make_error(request_id: Any, code: int, message: str, data: Any = None) -> Dict[str, Any]:
    """Return an error envelope."""
    error = RpcError(code=code, message=message, data=data)
    return {"jsonrpc": JSONRPC_VERSION, "error": error.to_dict(), "id": request_id}


def extract_id(payload: Any) -> Any:
    """Best-effort recovery of the ``id`` member from a decoded body.

    Ids that are not a string, number or null are replaced by ``None``.
    """
    if not isinstance(payload, dict):
        return None
    value = payload.get("id")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return None
    return value


__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "JSONRPC_VERSION",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
    "RpcError",
    "RpcRequest",
    "extract_id",
    "make_error",
    "make_result",
]
