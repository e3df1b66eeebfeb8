"""
Chat agent tools.

- calculate: safe arithmetic
- create_weather_tool(): weatherapi.com current conditions

Dependencies: langchain_core.tools, httpx
System role: Tool registry for the chat agent
"""

from ragchat.core.agentic_system.tools.calculator_tool import calculate
from ragchat.core.agentic_system.tools.weather_tool import create_weather_tool

__all__ = ["calculate", "create_weather_tool"]
