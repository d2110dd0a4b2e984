from __future__ import annotations

from datetime import datetime
from typing import Annotated, Dict, Literal, Type, Union

from pydantic import BaseModel, ConfigDict, Field

from monitor_protocol.errors import UnknownMessageTypeError
from monitor_protocol.schemas.envelope import Message, must_new_message, utcnow
from monitor_protocol.schemas.payloads import (
    PAYLOAD_TYPES,
    AuthAckPayload,
    AuthErrorPayload,
    AuthPayload,
    ErrorPayload,
    HeartbeatPayload,
    TaskCancelPayload,
    TaskPayload,
)


class BaseTypedMessage(BaseModel):
    """In-process view of a message: tag, decoded payload and timestamp."""

    model_config = ConfigDict(frozen=True)

    type: str
    timestamp: datetime = Field(default_factory=utcnow)


class AuthMessage(BaseTypedMessage):
    type: Literal["auth"] = "auth"
    payload: AuthPayload


class AuthAckMessage(BaseTypedMessage):
    type: Literal["auth_ack"] = "auth_ack"
    payload: AuthAckPayload


class AuthErrorMessage(BaseTypedMessage):
    type: Literal["auth_error"] = "auth_error"
    payload: AuthErrorPayload


class TaskMessage(BaseTypedMessage):
    type: Literal["task"] = "task"
    payload: TaskPayload


class TaskCancelMessage(BaseTypedMessage):
    type: Literal["task_cancel"] = "task_cancel"
    payload: TaskCancelPayload


class HeartbeatMessage(BaseTypedMessage):
    type: Literal["heartbeat"] = "heartbeat"
    payload: HeartbeatPayload


class PingMessage(BaseTypedMessage):
    type: Literal["ping"] = "ping"
    payload: None = None


class PongMessage(BaseTypedMessage):
    type: Literal["pong"] = "pong"
    payload: None = None


class ErrorMessage(BaseTypedMessage):
    type: Literal["error"] = "error"
    payload: ErrorPayload


TypedMessage = Annotated[
    Union[
        AuthMessage,
        AuthAckMessage,
        AuthErrorMessage,
        TaskMessage,
        TaskCancelMessage,
        HeartbeatMessage,
        PingMessage,
        PongMessage,
        ErrorMessage,
    ],
    Field(discriminator="type"),
]

TYPED_MESSAGES: Dict[str, Type[BaseTypedMessage]] = {
    "auth": AuthMessage,
    "auth_ack": AuthAckMessage,
    "auth_error": AuthErrorMessage,
    "task": TaskMessage,
    "task_cancel": TaskCancelMessage,
    "heartbeat": HeartbeatMessage,
    "ping": PingMessage,
    "pong": PongMessage,
    "error": ErrorMessage,
}


def to_typed(message: Message) -> TypedMessage:
    """Decode the tag, then the payload for that tag.

    Raises UnknownMessageTypeError for tags outside the protocol and
    DeserializationError when the payload does not fit its model.
    """
    cls = TYPED_MESSAGES.get(message.type)
    if cls is None:
        raise UnknownMessageTypeError(message.type)
    model = PAYLOAD_TYPES[message.type]
    payload = message.parse_payload(model) if model is not None else None
    return cls(payload=payload, timestamp=message.timestamp)


def from_typed(typed: BaseTypedMessage) -> Message:
    msg = must_new_message(typed.type, typed.payload)
    # re-validate so a naive timestamp is normalized to UTC
    return Message(type=msg.type, payload=msg.payload, timestamp=typed.timestamp)
