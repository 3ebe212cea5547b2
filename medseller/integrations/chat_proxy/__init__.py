from .client import ChatProxyClient

__all__ = ["ChatProxyClient"]
