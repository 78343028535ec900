"""ID generation and timestamp utilities."""

import uuid
from datetime import datetime, timezone


def generate_node_id() -> str:
    """Generate a unique node ID (UUID4)."""
    return str(uuid.uuid4())


def generate_edge_id() -> str:
    """Generate a unique edge ID (UUID4)."""
    return str(uuid.uuid4())


def generate_version_id() -> str:
    """Generate a unique version ID (UUID4)."""
    return str(uuid.uuid4())


def generate_flow_id() -> str:
    """Generate a unique flow document ID (UUID4)."""
    return str(uuid.uuid4())


def generate_comment_id() -> str:
    """Generate a unique comment ID (UUID4)."""
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    """Generate an ISO8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()
