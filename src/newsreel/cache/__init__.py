from newsreel.cache.base import ImageStore
from newsreel.cache.disk import DiskImageCache, cache_key, default_cache_root
from newsreel.cache.sniff import sniff_image_format

__all__ = [
    "DiskImageCache",
    "ImageStore",
    "cache_key",
    "default_cache_root",
    "sniff_image_format",
]
