"""View cache key namespace and defaults."""

CACHE_PREFIX = "view"
