"""
Domain layer - entities, errors, gateway interfaces and pure services.

Nothing in this package performs I/O.
"""
