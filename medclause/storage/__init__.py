"""Storage module - key/value persistence and value codecs."""

from .interface import StorageInterface
from .local_storage import LocalStorage
from .codec import StateCodec, JSONCodec, ObfuscatingCodec, CodecError

__all__ = ['StorageInterface', 'LocalStorage', 'StateCodec', 'JSONCodec', 'ObfuscatingCodec', 'CodecError']
