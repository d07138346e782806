"""
CineLens - outils MCP de consultation de metadonnees films et series.

Combine le catalogue de notes OMDb et le catalogue de metadonnees TMDB.
"""

__version__ = "1.0.0"
