"""MySQL liveness probe: answers whether a MySQL node is reachable and writable."""

__version__ = "0.1.0"
