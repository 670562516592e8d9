"""RPC message envelope and JSON-line codec.

Each message is one JSON object terminated by a newline.

Request:  {"id": 1, "method": "login", "params": {...}}
Response: {"id": 1, "result": {"clientId": 42}}
Error:    {"id": 1, "error": {"code": 8, "message": "Invalid login"}}
"""

import itertools
import json
from dataclasses import dataclass

# Generic structured value carried by requests and responses.
# dict preserves insertion order, which map encoders rely on.
RpcValue = None | bool | int | str | list["RpcValue"] | dict[str, "RpcValue"]

_request_ids = itertools.count(1)


@dataclass(frozen=True)
class RpcError:
    """Error part of a response."""

    code: int
    message: str

    def to_value(self) -> RpcValue:
        """Convert to a structured value for diagnostics."""
        return {"code": self.code, "message": self.message}

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class RpcMessage:
    """Request or response envelope.

    ``has_result`` tells an explicit ``"result": null`` apart from a response without a result.
    """

    method: str | None = None
    request_id: int | None = None
    params: RpcValue = None
    result: RpcValue = None
    has_result: bool = False
    error: RpcError | None = None

    @staticmethod
    def request(method: str, params: RpcValue = None) -> "RpcMessage":
        """Build a request with the next process-wide request id."""
        return RpcMessage(method=method, request_id=next(_request_ids), params=params)

    @staticmethod
    def response(request_id: int | None, result: RpcValue) -> "RpcMessage":
        """Build a success response."""
        return RpcMessage(request_id=request_id, result=result, has_result=True)

    @staticmethod
    def error_response(request_id: int | None, message: str, code: int = 0) -> "RpcMessage":
        """Build an error response."""
        return RpcMessage(request_id=request_id, error=RpcError(code=code, message=message))

    @property
    def is_success(self) -> bool:
        """True unless the message carries an error."""
        return self.error is None


def encode_message(msg: RpcMessage) -> bytes:
    """Serialize a message to a newline-terminated JSON bytes line."""
    payload: dict[str, object] = {}
    if msg.request_id is not None:
        payload["id"] = msg.request_id
    if msg.method is not None:
        payload["method"] = msg.method
        if msg.params is not None:
            payload["params"] = msg.params
    if msg.has_result:
        payload["result"] = msg.result
    if msg.error is not None:
        payload["error"] = msg.error.to_value()
    return json.dumps(payload).encode() + b"\n"


def decode_message(data: bytes) -> RpcMessage:
    """Deserialize a JSON bytes line into a message.

    Raises:
        ValueError: Not valid UTF-8 JSON, or not a JSON object.

    """
    try:
        obj = json.loads(data)
    except RecursionError:
        msg = "Malformed message: nesting too deep."
        raise ValueError(msg) from None
    if not isinstance(obj, dict):
        msg = f"Expected a JSON object, got {type(obj).__name__}."
        raise ValueError(msg)  # noqa: TRY004
    return RpcMessage(
        method=obj.get("method"),
        request_id=obj.get("id"),
        params=obj.get("params"),
        result=obj.get("result"),
        has_result="result" in obj,
        error=_decode_error(obj["error"]) if obj.get("error") is not None else None,
    )


def _decode_error(raw: object) -> RpcError:
    """Decode the error part of a response; a bare string is taken as the message."""
    if isinstance(raw, str):
        return RpcError(code=0, message=raw)
    if not isinstance(raw, dict):
        msg = f"Malformed error: {raw!r}"
        raise ValueError(msg)  # noqa: TRY004
    code = raw.get("code", 0)
    message = raw.get("message")
    return RpcError(code=code if isinstance(code, int) else 0, message=message if isinstance(message, str) else "")
