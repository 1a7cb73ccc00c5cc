"""Diffie-Hellman parameter value type and well-known groups."""
