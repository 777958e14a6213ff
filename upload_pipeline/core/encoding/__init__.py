"""
Multipart encoding of upload requests
"""

from .asset_encoder import AssetEncoder, MultipartBody
from .asset_source import AssetSource, FileBackedSource, InMemorySource, asset_source_for

__all__ = [
    "AssetEncoder",
    "AssetSource",
    "FileBackedSource",
    "InMemorySource",
    "MultipartBody",
    "asset_source_for",
]
