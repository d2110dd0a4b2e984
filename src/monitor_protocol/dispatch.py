from __future__ import annotations

from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from monitor_protocol.errors import UnhandledMessageError
from monitor_protocol.schemas.envelope import Message, decode_message
from monitor_protocol.schemas.payloads import PAYLOAD_TYPES
from monitor_protocol.utils.logger_util import get_logger

logger = get_logger(__name__)

Handler = Callable[[Any, Message], Any]
Fallback = Callable[[Message], Any]


class MessageRouter:
    """Route incoming messages to handlers by their ``type`` tag.

    Handlers receive the decoded payload (``None`` for ping/pong) and the
    envelope. Tags without a handler go to the fallback when one is set,
    otherwise dispatch raises UnhandledMessageError. Payload decoding errors
    propagate to the caller, which decides whether to reply with an ``error``
    message or drop the connection.

    Example:
        router = MessageRouter()

        @router.on(MessageType.TASK)
        def on_task(task, msg):
            scheduler.add(task.monitor_id, task.interval)

        router.dispatch_raw(ws_frame)
    """

    def __init__(self):
        self._handlers: Dict[str, Handler] = {}
        self._fallback: Optional[Fallback] = None

    @staticmethod
    def _key(msg_type: Union[str, Enum]) -> str:
        return msg_type.value if isinstance(msg_type, Enum) else msg_type

    def register(self, msg_type: Union[str, Enum], handler: Handler) -> Handler:
        key = self._key(msg_type)
        if key in self._handlers:
            logger.debug("replacing handler for %s", key)
        self._handlers[key] = handler
        return handler

    def on(self, msg_type: Union[str, Enum]) -> Callable[[Handler], Handler]:
        def _decorator(fn: Handler) -> Handler:
            return self.register(msg_type, fn)
        return _decorator

    def fallback(self, handler: Fallback) -> Fallback:
        self._fallback = handler
        return handler

    def handles(self, msg_type: Union[str, Enum]) -> bool:
        return self._key(msg_type) in self._handlers

    def dispatch(self, message: Message) -> Any:
        handler = self._handlers.get(message.type)
        if handler is None:
            if self._fallback is not None:
                logger.debug("no handler for %s, using fallback", message.type)
                return self._fallback(message)
            logger.warning("dropping unroutable message type %r", message.type)
            raise UnhandledMessageError(message.type)

        # handlers registered for tags outside the protocol get the raw payload bytes
        model = PAYLOAD_TYPES.get(message.type)
        if model is not None:
            payload = message.parse_payload(model)
        elif message.type in PAYLOAD_TYPES:
            payload = None
        else:
            payload = message.payload
        logger.debug("dispatching %s to %s", message.type, getattr(handler, "__name__", handler))
        return handler(payload, message)

    def dispatch_raw(self, data: Union[str, bytes, bytearray]) -> Any:
        """Decode one wire message and dispatch it."""
        return self.dispatch(decode_message(data))
