"""Agentic system: the chat agent and its tools."""
