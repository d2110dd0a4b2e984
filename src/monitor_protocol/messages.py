"""Named constructors for every protocol message.

Each helper fixes the ``type`` tag and builds the matching payload model.
The result is identical to calling ``new_message`` with the same payload.
"""

from __future__ import annotations

from typing import Optional

from monitor_protocol.schemas.envelope import Message, must_new_message
from monitor_protocol.schemas.payloads import (
    AuthAckPayload,
    AuthErrorPayload,
    AuthPayload,
    ErrorPayload,
    HeartbeatPayload,
    MessageType,
    TaskCancelPayload,
    TaskPayload,
)


def new_auth_message(api_key: str, version: str = "") -> Message:
    return must_new_message(MessageType.AUTH, AuthPayload(api_key=api_key, version=version))


def new_auth_ack_message(agent_id: str, agent_name: str) -> Message:
    return must_new_message(MessageType.AUTH_ACK, AuthAckPayload(agent_id=agent_id, agent_name=agent_name))


def new_auth_error_message(error: str) -> Message:
    return must_new_message(MessageType.AUTH_ERROR, AuthErrorPayload(error=error))


def new_task_message(monitor_id: str, monitor_type: str, target: str, interval: int, timeout: int) -> Message:
    """Assign a check to an agent. ``interval`` and ``timeout`` are seconds."""
    return must_new_message(
        MessageType.TASK,
        TaskPayload(
            monitor_id=monitor_id,
            type=monitor_type,
            target=target,
            interval=interval,
            timeout=timeout,
        ),
    )


def new_task_cancel_message(monitor_id: str) -> Message:
    return must_new_message(MessageType.TASK_CANCEL, TaskCancelPayload(monitor_id=monitor_id))


def new_heartbeat_message(
    monitor_id: str,
    status: str,
    latency_ms: int = 0,
    error_message: str = "",
    cert_expiry_days: Optional[int] = None,
    cert_issuer: str = "",
) -> Message:
    """Report the result of one check cycle.

    The certificate fields are only set by TLS checks; leave them at their
    defaults for other check kinds so they stay off the wire.
    """
    return must_new_message(
        MessageType.HEARTBEAT,
        HeartbeatPayload(
            monitor_id=monitor_id,
            status=status,
            latency_ms=latency_ms,
            error_message=error_message,
            cert_expiry_days=cert_expiry_days,
            cert_issuer=cert_issuer,
        ),
    )


def new_ping_message() -> Message:
    return must_new_message(MessageType.PING)


def new_pong_message() -> Message:
    return must_new_message(MessageType.PONG)


def new_error_message(code: str, message: str) -> Message:
    return must_new_message(MessageType.ERROR, ErrorPayload(code=code, message=message))
