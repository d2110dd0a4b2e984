"""Schemas package for the hub/agent wire contract.

``payloads`` holds one model per payload kind, ``envelope`` the wire
``Message`` and ``typed`` the discriminated in-process view of it.
"""

__all__ = ["envelope", "payloads", "typed"]
