"""Library initialization helpers for the API server."""

from procflow import config
from procflow.library import FlowLibrary
from procflow.storage.sqlite import SqliteFlowStorage

_library: FlowLibrary | None = None


def get_library() -> FlowLibrary:
    """Return the process-wide library backed by PROCFLOW_DB_PATH."""
    global _library
    if _library is None:
        _library = FlowLibrary(SqliteFlowStorage(config.FLOW_DB_PATH))
    return _library


def init_all() -> None:
    """initialize sqlite tables."""
    get_library()
