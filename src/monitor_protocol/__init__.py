"""Message protocol shared by the monitoring hub and its agents."""

from .errors import (
    DeserializationError,
    ProtocolError,
    SerializationError,
    UnhandledMessageError,
    UnknownMessageTypeError,
)
from .schemas.payloads import (
    PAYLOAD_TYPES,
    AuthAckPayload,
    AuthErrorPayload,
    AuthPayload,
    CheckType,
    ErrorPayload,
    HeartbeatPayload,
    HeartbeatStatus,
    MessageType,
    Payload,
    TaskCancelPayload,
    TaskPayload,
)
from .schemas.envelope import Message, decode_message, must_new_message, new_message
from .schemas.typed import TypedMessage, from_typed, to_typed
from .messages import (
    new_auth_ack_message,
    new_auth_error_message,
    new_auth_message,
    new_error_message,
    new_heartbeat_message,
    new_ping_message,
    new_pong_message,
    new_task_cancel_message,
    new_task_message,
)
from .dispatch import MessageRouter

__version__ = "0.1.0"

__all__ = [
    "ProtocolError",
    "SerializationError",
    "DeserializationError",
    "UnknownMessageTypeError",
    "UnhandledMessageError",
    "MessageType",
    "CheckType",
    "HeartbeatStatus",
    "PAYLOAD_TYPES",
    "Payload",
    "AuthPayload",
    "AuthAckPayload",
    "AuthErrorPayload",
    "TaskPayload",
    "TaskCancelPayload",
    "HeartbeatPayload",
    "ErrorPayload",
    "Message",
    "new_message",
    "must_new_message",
    "decode_message",
    "TypedMessage",
    "to_typed",
    "from_typed",
    "new_auth_message",
    "new_auth_ack_message",
    "new_auth_error_message",
    "new_task_message",
    "new_task_cancel_message",
    "new_heartbeat_message",
    "new_ping_message",
    "new_pong_message",
    "new_error_message",
    "MessageRouter",
]
