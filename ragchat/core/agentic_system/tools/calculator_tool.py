"""
Calculator tool.

Exposes the arithmetic evaluator to the chat agent. Input errors are
returned to the model as text so it can correct itself.

Dependencies: langchain_core.tools, ragchat.core.calculator
System role: Arithmetic tool for the chat agent
"""

import logging

from langchain_core.tools import tool

from ragchat.core.calculator import evaluate
from ragchat.core.exceptions import CalculationError

logger = logging.getLogger(__name__)


@tool
def calculate(expression: str) -> str:
    """Perform a mathematical calculation.

    Supports +, -, *, / and ^ (power) with parentheses, e.g. "(2 + 3) * 4^2".

    Args:
        expression: The arithmetic expression to evaluate

    Returns:
        str: The result, or an error description
    """
    try:
        result = evaluate(expression)
    except CalculationError as e:
        logger.info("Calculation rejected", extra={"expression": expression, "reason": e.message})
        return f"Error: {e.message}"

    return f"{expression} = {result}"
