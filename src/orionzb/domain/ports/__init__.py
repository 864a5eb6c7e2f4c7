from .orionoid import OrionoidClientPort
from .stream_cache import StreamCachePort

__all__ = [
    "OrionoidClientPort",
    "StreamCachePort",
]
