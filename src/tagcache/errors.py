"""Exceptions raised by tagcache."""


class TagCacheError(Exception):
    """Base class for tagcache errors."""


class BatchRejectedError(TagCacheError):
    """An atomic write batch was rejected; none of its commands took effect."""
