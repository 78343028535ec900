"""Clients for the AI collaborators."""

from procflow.adapters.flow_analyzer import FlowAnalyzer, describe_flow, parse_analysis
from procflow.adapters.flow_generator import FlowGenerator, GeneratedFlow, parse_generated_flow
from procflow.adapters.openai_client import JsonChatClient, create_openai_client

__all__ = [
    "FlowAnalyzer",
    "FlowGenerator",
    "GeneratedFlow",
    "JsonChatClient",
    "create_openai_client",
    "describe_flow",
    "parse_analysis",
    "parse_generated_flow",
]
