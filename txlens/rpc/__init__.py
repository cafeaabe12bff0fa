from .client import NodeClient

__all__ = ["NodeClient"]
