"""Container signature payloads, TUF target caching and an async Rekor client."""

__version__ = "0.1.0"

__all__ = [
    "rekor_api",
    "rekor_config",
    "rekor_entries",
    "rekor_kinds",
    "rekor_log",
    "simple_signing",
    "tuf_cache",
    "tuf_constants",
]