"""
Adaptateurs: implementations concretes des ports et interface MCP.
"""
