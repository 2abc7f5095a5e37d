from __future__ import annotations

from enum import Enum


class SearchDepth(str, Enum):
    basic = "basic"
    advanced = "advanced"


class Origin(str, Enum):
    cache = "cache"
    live = "live"
