from .proxybase_client import API_KEY_HEADER, ProxyBaseClient

__all__ = ["API_KEY_HEADER", "ProxyBaseClient"]
