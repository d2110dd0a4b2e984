"""Exceptions raised while building or decoding protocol messages."""

from __future__ import annotations


class ProtocolError(Exception):
    """Base class for protocol failures.

    ``code`` is the value sent in the ``code`` field of an ``error`` message
    when the failure is reported back to the peer.
    """

    code = "protocol_error"

    def to_message(self):
        # imported here: messages depends on this module
        from monitor_protocol.messages import new_error_message

        return new_error_message(self.code, str(self))


class SerializationError(ProtocolError):
    """A payload value could not be encoded as JSON."""

    code = "serialization_error"


class DeserializationError(ProtocolError, ValueError):
    """Envelope or payload bytes do not match the expected shape."""

    code = "invalid_payload"


class UnknownMessageTypeError(DeserializationError):
    code = "unknown_message_type"

    def __init__(self, msg_type: str):
        super().__init__(f"unknown message type: {msg_type!r}")
        self.msg_type = msg_type


class UnhandledMessageError(ProtocolError):
    code = "unhandled_message"

    def __init__(self, msg_type: str):
        super().__init__(f"no handler registered for message type {msg_type!r}")
        self.msg_type = msg_type
