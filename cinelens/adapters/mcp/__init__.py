"""
Interface MCP: declaration des outils, validation des entrees et
construction des reponses.
"""

from cinelens.adapters.mcp.responses import error_response, success_response
from cinelens.adapters.mcp.server import CineLensServer, ToolSpec, build_tool_specs

__all__ = [
    "CineLensServer",
    "ToolSpec",
    "build_tool_specs",
    "error_response",
    "success_response",
]
