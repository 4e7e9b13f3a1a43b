from tools.implementations import dispatch_tool, text_result
from tools.registry import TOOL_DEFINITIONS, TOOL_NAMES

__all__ = ["TOOL_DEFINITIONS", "TOOL_NAMES", "dispatch_tool", "text_result"]
