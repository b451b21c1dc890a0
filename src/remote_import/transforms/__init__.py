from remote_import.transforms.asset_urls import (
    AssetUrlTransform,
    find_asset_references,
    rewrite_value,
)
from remote_import.transforms.base import Transform
from remote_import.transforms.media import wrap_conditions

__all__ = [
    "AssetUrlTransform",
    "Transform",
    "find_asset_references",
    "rewrite_value",
    "wrap_conditions",
]
