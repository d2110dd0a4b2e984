from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticSerializationError, to_json

from monitor_protocol.errors import DeserializationError, SerializationError
from monitor_protocol.schemas.payloads import PAYLOAD_MODELS, Payload
from monitor_protocol.utils.logger_util import get_logger

logger = get_logger(__name__)

P = TypeVar("P", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """RFC3339 text with a ``Z`` suffix."""
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _reject_constant(name: str):
    raise ValueError(f"{name} is not valid JSON")


def _tag(msg_type: Union[str, Enum]) -> str:
    return msg_type.value if isinstance(msg_type, Enum) else msg_type


class Message(BaseModel):
    """Wire envelope shared by every message kind.

    ``payload`` holds the JSON-encoded payload bytes for ``type`` (``None`` for
    ping/pong). The envelope never looks inside it; call ``parse_payload``
    with the model matching ``type``.
    """

    model_config = ConfigDict(frozen=True)

    type: str
    payload: Optional[bytes] = None
    timestamp: datetime = Field(default_factory=utcnow)

    @field_validator("type", mode="before")
    def _enum_to_tag(cls, v):
        return _tag(v) if isinstance(v, Enum) else v

    @field_validator("payload")
    def _empty_is_none(cls, v: Optional[bytes]):
        # JSON null carries nothing, same as an absent payload
        if not v or v.strip() == b"null":
            return None
        return v

    @field_validator("timestamp")
    def _as_utc(cls, v: datetime):
        # naive timestamps are taken as UTC
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def parse_payload(self, into: Union[Type[P], P]) -> P:
        """Decode the payload into ``into`` (a payload model class or instance).

        An empty payload is a no-op: a class yields its default instance and an
        instance is returned as is. Keys missing from the payload keep the
        destination's value; unknown keys are ignored. Raises
        DeserializationError when the bytes do not fit the model.
        """
        if isinstance(into, type):
            model, current = into, None
        else:
            model, current = type(into), into

        if not self.payload:
            return current if current is not None else model()

        try:
            parsed = model.model_validate_json(self.payload)
        except ValidationError as exc:
            logger.debug("failed to decode %s payload as %s: %s", self.type, model.__name__, exc)
            raise DeserializationError(
                f"invalid {self.type!r} payload for {model.__name__}: {exc}"
            ) from exc

        if current is None:
            return parsed
        return current.model_copy(update={name: getattr(parsed, name) for name in parsed.model_fields_set})

    def to_wire(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"type": self.type}
        if self.payload:
            try:
                out["payload"] = json.loads(self.payload, parse_constant=_reject_constant)
            except (ValueError, RecursionError) as exc:
                raise SerializationError(f"{self.type!r} payload is not valid JSON: {exc}") from exc
        out["timestamp"] = format_timestamp(self.timestamp)
        return out

    def to_json(self) -> str:
        try:
            return json.dumps(self.to_wire(), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        except ValueError as exc:
            raise SerializationError(f"cannot encode {self.type!r} message: {exc}") from exc

    @classmethod
    def from_json(cls, data: Union[str, bytes, bytearray]) -> "Message":
        """Decode one wire message.

        Only the envelope is checked here. The payload is kept as bytes until
        the receiver picks a model for ``type``.
        """
        try:
            raw = json.loads(data, parse_constant=_reject_constant)
        except (TypeError, ValueError, RecursionError) as exc:
            # RecursionError: nesting too deep for the decoder
            raise DeserializationError(f"malformed message: {exc}") from exc
        if not isinstance(raw, dict):
            raise DeserializationError("message must be a JSON object")
        if not isinstance(raw.get("type"), str):
            raise DeserializationError("message has no string 'type'")
        if "timestamp" not in raw:
            raise DeserializationError("message has no 'timestamp'")

        payload = raw.get("payload")
        if payload is not None:
            try:
                payload = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
            except (ValueError, RecursionError) as exc:
                raise DeserializationError(f"malformed payload: {exc}") from exc
        try:
            return cls(type=raw["type"], payload=payload, timestamp=raw["timestamp"])
        except ValidationError as exc:
            raise DeserializationError(f"invalid message envelope: {exc}") from exc


def new_message(msg_type: Union[str, Enum], payload: Any = None) -> Message:
    """Build a message stamped with the current UTC time.

    ``payload`` may be a pydantic model or any JSON-serializable value.
    Raises SerializationError when it cannot be encoded.
    """
    if payload is None:
        return Message(type=_tag(msg_type))
    try:
        if isinstance(payload, BaseModel):
            data = payload.model_dump_json().encode("utf-8")
        else:
            data = to_json(payload)
        # NaN and Infinity are not JSON
        json.loads(data, parse_constant=_reject_constant)
    except (PydanticSerializationError, ValueError, TypeError, RecursionError) as exc:
        logger.debug("could not encode %s payload: %s", _tag(msg_type), exc)
        raise SerializationError(f"cannot encode {_tag(msg_type)!r} payload: {exc}") from exc
    return Message(type=_tag(msg_type), payload=data)


def must_new_message(msg_type: Union[str, Enum], payload: Optional[Payload] = None) -> Message:
    """Build a message from one of the protocol's own payload models.

    Those models only hold strings and ints, so encoding cannot fail. Any
    other payload is a programming error and raises TypeError.
    """
    if payload is not None and not isinstance(payload, PAYLOAD_MODELS):
        raise TypeError(
            f"must_new_message takes a protocol payload model, got {type(payload).__name__}"
        )
    data = payload.model_dump_json().encode("utf-8") if payload is not None else None
    return Message(type=_tag(msg_type), payload=data)


def decode_message(data: Union[str, bytes, bytearray]) -> Message:
    return Message.from_json(data)
