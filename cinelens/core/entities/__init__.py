"""Entites transitoires produites par la resolution et la fusion."""

from cinelens.core.entities.references import (
    CreditEntry,
    MovieReference,
    SeriesReference,
)

__all__ = [
    "CreditEntry",
    "MovieReference",
    "SeriesReference",
]
