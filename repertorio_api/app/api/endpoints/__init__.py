"""
Endpoint modules.

Each module exposes a ``router`` that is included by ``api.router``.
"""
