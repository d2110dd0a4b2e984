import pytest

from monitor_protocol import messages
from monitor_protocol.dispatch import MessageRouter
from monitor_protocol.errors import DeserializationError, UnhandledMessageError
from monitor_protocol.schemas.envelope import Message
from monitor_protocol.schemas.payloads import MessageType, TaskPayload


def test_dispatch_decodes_payload_for_tag():
    router = MessageRouter()
    seen = []

    @router.on(MessageType.TASK)
    def on_task(task, msg):
        seen.append((task, msg.type))
        return task.monitor_id

    result = router.dispatch(messages.new_task_message("m-1", "http", "https://example.com", 30, 10))
    assert result == "m-1"
    assert isinstance(seen[0][0], TaskPayload)
    assert seen[0][1] == "task"


def test_ping_handler_gets_no_payload():
    router = MessageRouter()
    router.register("ping", lambda payload, msg: messages.new_pong_message() if payload is None else None)
    reply = router.dispatch(messages.new_ping_message())
    assert reply.type == "pong"


def test_dispatch_raw_from_wire():
    router = MessageRouter()
    router.register("heartbeat", lambda hb, msg: (hb.monitor_id, hb.status, hb.latency_ms))
    wire = messages.new_heartbeat_message("m-2", "timeout", latency_ms=5000).to_json()
    assert router.dispatch_raw(wire) == ("m-2", "timeout", 5000)


def test_unhandled_message_raises():
    router = MessageRouter()
    with pytest.raises(UnhandledMessageError) as exc:
        router.dispatch(messages.new_pong_message())
    assert exc.value.msg_type == "pong"
    assert exc.value.to_message().type == "error"


def test_fallback_receives_unrouted_messages():
    router = MessageRouter()
    router.register("ping", lambda payload, msg: "ping")

    @router.fallback
    def other(msg):
        return f"fallback:{msg.type}"

    assert router.dispatch(messages.new_ping_message()) == "ping"
    assert router.dispatch(Message(type="metrics")) == "fallback:metrics"


def test_custom_tag_handler_gets_raw_bytes():
    router = MessageRouter()
    router.register("metrics", lambda payload, msg: payload)
    assert router.dispatch(Message(type="metrics", payload=b'{"cpu":1}')) == b'{"cpu":1}'


def test_register_replaces_and_handles():
    router = MessageRouter()
    assert not router.handles("auth")
    router.register("auth", lambda p, m: "first")
    router.register(MessageType.AUTH, lambda p, m: "second")
    assert router.handles(MessageType.AUTH)
    assert router.dispatch(messages.new_auth_message("k")) == "second"


def test_bad_payload_propagates_to_caller():
    router = MessageRouter()
    router.register("task", lambda task, msg: task)
    with pytest.raises(DeserializationError):
        router.dispatch(Message(type="task", payload=b'{"interval": "thirty"}'))
