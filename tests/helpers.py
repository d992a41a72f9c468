"""Helpers shared by the gateway and CLI tests."""


def rpc(method, params=None, request_id=1):
    """Build a JSON-RPC 2.0 request body."""
    body = {"jsonrpc": "2.0", "method": method, "id": request_id}
    if params is not None:
        body["params"] = params
    return body
