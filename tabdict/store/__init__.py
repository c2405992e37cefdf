"""Dictionary persistence: blob stores and the serialized format."""

from .blob import BlobStore, LocalBlobStore, MemoryBlobStore
from .codec import FORMAT_VERSION, decode_entries, encode_entries

__all__ = [
    "BlobStore",
    "LocalBlobStore",
    "MemoryBlobStore",
    "FORMAT_VERSION",
    "decode_entries",
    "encode_entries",
]
