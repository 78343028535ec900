"""HTTP API for procflow."""
