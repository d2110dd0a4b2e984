from __future__ import annotations

from enum import Enum
from typing import ClassVar, Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, model_serializer, model_validator


class MessageType(str, Enum):
    AUTH = "auth"
    AUTH_ACK = "auth_ack"
    AUTH_ERROR = "auth_error"
    TASK = "task"
    TASK_CANCEL = "task_cancel"
    HEARTBEAT = "heartbeat"
    PING = "ping"
    PONG = "pong"
    ERROR = "error"


class CheckType(str, Enum):
    """Check kinds an agent knows how to run for a task."""

    HTTP = "http"
    TCP = "tcp"
    PING = "ping"
    DNS = "dns"
    TLS = "tls"


class HeartbeatStatus(str, Enum):
    UP = "up"
    DOWN = "down"
    TIMEOUT = "timeout"
    ERROR = "error"


KNOWN_CHECK_TYPES = frozenset(c.value for c in CheckType)
KNOWN_STATUSES = frozenset(s.value for s in HeartbeatStatus)


class WirePayload(BaseModel):
    """Common base for payload records.

    Decoding is strict about JSON types (no "30" -> 30 coercion), ignores keys
    it does not know and treats ``null`` as "not sent". Enum members such as
    ``CheckType.HTTP`` are accepted for string fields. Fields listed in
    ``omit_if_zero`` are dropped from the encoded object when empty or zero;
    fields in ``omit_if_none`` only when ``None``.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="ignore")

    omit_if_zero: ClassVar[Tuple[str, ...]] = ()
    omit_if_none: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _normalize_input(cls, data):
        if isinstance(data, dict):
            return {
                k: (v.value if isinstance(v, Enum) else v)
                for k, v in data.items()
                if v is not None
            }
        return data

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        for name in self.omit_if_zero:
            if data.get(name) in ("", 0):
                data.pop(name, None)
        for name in self.omit_if_none:
            if name in data and data[name] is None:
                del data[name]
        return data


class AuthPayload(WirePayload):
    """Sent by an agent to authenticate."""

    omit_if_zero: ClassVar[Tuple[str, ...]] = ("version",)

    api_key: str = ""
    version: str = ""


class AuthAckPayload(WirePayload):
    """Sent by the hub to confirm authentication and hand out the agent identity."""

    agent_id: str = ""
    agent_name: str = ""


class AuthErrorPayload(WirePayload):
    error: str = ""


class TaskPayload(WirePayload):
    """A monitoring assignment. ``interval`` and ``timeout`` are in seconds."""

    monitor_id: str = ""
    type: str = ""
    target: str = ""
    interval: int = 0
    timeout: int = 0

    def is_known_type(self) -> bool:
        return self.type in KNOWN_CHECK_TYPES


class TaskCancelPayload(WirePayload):
    monitor_id: str = ""


class HeartbeatPayload(WirePayload):
    """Result of one check cycle.

    ``cert_expiry_days`` is ``None`` when no certificate was inspected; ``0``
    means the certificate expires today and is sent on the wire.
    """

    omit_if_zero: ClassVar[Tuple[str, ...]] = ("latency_ms", "error_message", "cert_issuer")
    omit_if_none: ClassVar[Tuple[str, ...]] = ("cert_expiry_days",)

    monitor_id: str = ""
    status: str = ""
    latency_ms: int = 0
    error_message: str = ""
    cert_expiry_days: Optional[int] = None
    cert_issuer: str = ""

    def is_known_status(self) -> bool:
        return self.status in KNOWN_STATUSES


class ErrorPayload(WirePayload):
    code: str = ""
    message: str = ""


Payload = Union[
    AuthPayload,
    AuthAckPayload,
    AuthErrorPayload,
    TaskPayload,
    TaskCancelPayload,
    HeartbeatPayload,
    ErrorPayload,
]

PAYLOAD_MODELS: Tuple[Type[WirePayload], ...] = (
    AuthPayload,
    AuthAckPayload,
    AuthErrorPayload,
    TaskPayload,
    TaskCancelPayload,
    HeartbeatPayload,
    ErrorPayload,
)

# tag -> payload model; None for messages that carry no payload
PAYLOAD_TYPES: Dict[str, Optional[Type[WirePayload]]] = {
    MessageType.AUTH.value: AuthPayload,
    MessageType.AUTH_ACK.value: AuthAckPayload,
    MessageType.AUTH_ERROR.value: AuthErrorPayload,
    MessageType.TASK.value: TaskPayload,
    MessageType.TASK_CANCEL.value: TaskCancelPayload,
    MessageType.HEARTBEAT.value: HeartbeatPayload,
    MessageType.PING.value: None,
    MessageType.PONG.value: None,
    MessageType.ERROR.value: ErrorPayload,
}
