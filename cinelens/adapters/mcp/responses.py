"""
Construction des reponses d'outils MCP.

Une reponse porte un unique bloc texte: le JSON indente du resultat en cas
de succes, ou "Error {contexte}: {message}" avec le drapeau isError.
"""

import json
from typing import Any

from mcp.types import CallToolResult, TextContent


def success_response(data: Any) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(data, indent=2, ensure_ascii=False))],
        isError=False,
    )


def error_response(context: str, error: BaseException) -> CallToolResult:
    """
    Reponse d'erreur pour un outil.

    Args:
        context: Action en cours, ex: "searching movies"
        error: Exception remontee; son message est repris tel quel
    """
    message = str(error) or "Unknown error occurred"
    return CallToolResult(
        content=[TextContent(type="text", text=f"Error {context}: {message}")],
        isError=True,
    )
