"""Storage backends for the flow library."""

from procflow.storage.base import FlowStorage
from procflow.storage.memory import MemoryFlowStorage
from procflow.storage.sqlite import SqliteFlowStorage

__all__ = [
    "FlowStorage",
    "MemoryFlowStorage",
    "SqliteFlowStorage",
]
