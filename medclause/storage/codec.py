"""
State Codecs - serialise persisted state values to text.

``ObfuscatingCodec`` wraps the JSON text in a Fernet token. The key is
derived from a passphrase that ships with the application, so anyone with
the application can read the data back. It keeps values from being
readable at a glance in the storage directory and nothing more: it is
obfuscation, not confidentiality, and must not be treated as a security
boundary.
"""

import base64
import json
from abc import ABC, abstractmethod
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class CodecError(ValueError):
    """Stored text could not be decoded."""


class StateCodec(ABC):
    """Encode values to text and back."""

    @abstractmethod
    def encode(self, value: Any) -> str:
        pass

    @abstractmethod
    def decode(self, text: str) -> Any:
        """Decode text produced by encode. Raises CodecError on failure."""
        pass


class JSONCodec(StateCodec):
    """Plain JSON."""

    def encode(self, value: Any) -> str:
        return json.dumps(value, ensure_ascii=False, default=str)

    def decode(self, text: str) -> Any:
        try:
            return json.loads(text)
        # deeply nested text overflows the parser stack
        except (TypeError, ValueError, RecursionError) as e:
            raise CodecError(f"Invalid JSON: {e}") from e


# Fixed salt: the derived key must be stable across processes
_SALT = b"medclausex.state.v1"
_ITERATIONS = 100_000


def _derive_key(passphrase: str) -> bytes:
    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA256(),
        length=32,
        salt=_SALT,
        iterations=_ITERATIONS,
    )
    return base64.urlsafe_b64encode(kdf.derive(passphrase.encode("utf-8")))


class ObfuscatingCodec(JSONCodec):
    """JSON wrapped in a Fernet token keyed by a built-in passphrase. Not encryption at rest."""

    def __init__(self, passphrase: str):
        self._fernet = Fernet(_derive_key(passphrase))

    def encode(self, value: Any) -> str:
        raw = super().encode(value).encode("utf-8")
        return self._fernet.encrypt(raw).decode("ascii")

    def decode(self, text: str) -> Any:
        try:
            raw = self._fernet.decrypt(text.encode("utf-8"))
        except (InvalidToken, TypeError, ValueError) as e:
            raise CodecError("Stored value is not a valid token") from e
        try:
            return super().decode(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise CodecError("Stored value is not UTF-8") from e
