"""
Ports (interfaces abstraites) definissant les contrats des catalogues externes.

- IRatingsCatalog : catalogue de notes (OMDb)
- IMetadataCatalog : catalogue de metadonnees (TMDB)
- CatalogRecord : reponse JSON brute d'une requete
"""

from cinelens.core.ports.api_clients import (
    CatalogRecord,
    IMetadataCatalog,
    IRatingsCatalog,
)

__all__ = [
    "CatalogRecord",
    "IMetadataCatalog",
    "IRatingsCatalog",
]
