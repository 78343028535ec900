"""Utility functions for procflow."""

from procflow.utils.identifiers import (
    generate_comment_id,
    generate_edge_id,
    generate_flow_id,
    generate_node_id,
    generate_version_id,
    utc_timestamp,
)

__all__ = [
    "generate_comment_id",
    "generate_edge_id",
    "generate_flow_id",
    "generate_node_id",
    "generate_version_id",
    "utc_timestamp",
]
