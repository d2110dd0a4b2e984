import os
from typing import Callable

# keep test runs from picking up a developer's .env file
os.environ.setdefault("MONITOR_PROTOCOL_DOTENV", os.devnull)

import pytest

from monitor_protocol import config
from monitor_protocol.schemas.envelope import Message


@pytest.fixture(autouse=True)
def fresh_settings():
    """Drop cached settings so each test sees its own environment."""
    config.reset_settings()
    yield
    config.reset_settings()


@pytest.fixture
def raw_message() -> Callable[[str, bytes], Message]:
    """
    Return a helper building a Message with arbitrary payload bytes.
    Usage: msg = raw_message("task", b'{"interval": "thirty"}')
    """
    def _make(msg_type: str, payload: bytes) -> Message:
        return Message(type=msg_type, payload=payload)
    return _make
