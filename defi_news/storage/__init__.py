from .article_store import ArticleStore
from .backend import KeyValueBackend
from .memory import MemoryBackend
from .redis_backend import RedisBackend

__all__ = ["ArticleStore", "KeyValueBackend", "MemoryBackend", "RedisBackend"]
