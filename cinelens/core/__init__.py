"""
Couche domaine de CineLens.

Contient les exceptions, les references canoniques et les ports (interfaces)
des catalogues externes.
"""
