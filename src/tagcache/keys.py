"""Backend key naming.

Data entries and tag member-sets live in separate namespaces so a tag can
never collide with a cached key of the same name:
- `data:<key>` = serialized value
- `tags:<tag>` = set of keys tagged with <tag>
"""

DATA_PREFIX = "data:"
TAG_PREFIX = "tags:"


def data_key(key: str) -> str:
    return f"{DATA_PREFIX}{key}"


def tag_key(tag: str) -> str:
    return f"{TAG_PREFIX}{tag}"
