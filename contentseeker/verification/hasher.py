import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from cryptography.hazmat.decrepit.ciphers.algorithms import TripleDES
from cryptography.hazmat.primitives.ciphers import Cipher, modes

from contentseeker.common.exceptions import HashError
from contentseeker.common.models import HashAlgorithm, HashOutcome
from contentseeker.config import HASH_BLOCK_SIZE
from contentseeker.logging_cfg import get_logger

logger = get_logger("verification.hasher")

_HASHLIB_NAMES = {
    HashAlgorithm.MD5: "md5",
    HashAlgorithm.SHA1: "sha1",
    HashAlgorithm.SHA256: "sha256",
    HashAlgorithm.SHA384: "sha384",
    HashAlgorithm.SHA512: "sha512",
    HashAlgorithm.RIPEMD160: "ripemd160",
}

_DES_BLOCK = 8
_TRIPLE_DES_KEY_SIZE = 24


@dataclass(frozen=True)
class FromBytes:
    data: bytes


@dataclass(frozen=True)
class FromStream:
    """An already open binary stream; read to the end but not closed."""
    stream: BinaryIO
    name: str = "<stream>"


@dataclass(frozen=True)
class FromFile:
    path: Path


HashSource = Union[FromBytes, FromStream, FromFile]


class _TripleDesMac:
    """CBC-MAC over Triple-DES: zero IV, zero padding, last block is the MAC."""

    def __init__(self, key: bytes):
        self._encryptor = Cipher(TripleDES(key), modes.CBC(b"\x00" * _DES_BLOCK)).encryptor()
        self._last = b""
        self._length = 0

    def update(self, chunk: bytes) -> None:
        self._length += len(chunk)
        out = self._encryptor.update(chunk)
        if out:
            self._last = out[-_DES_BLOCK:]

    def hexdigest(self) -> str:
        pad = (-self._length) % _DES_BLOCK
        if self._length == 0:
            pad = _DES_BLOCK
        if pad:
            out = self._encryptor.update(b"\x00" * pad)
            if out:
                self._last = out[-_DES_BLOCK:]
        self._encryptor.finalize()
        return self._last.hex()


def _init_hash_object(algorithm: HashAlgorithm, key: Optional[bytes] = None):
    if algorithm == HashAlgorithm.MAC_TRIPLE_DES:
        if key is None:
            # Same as the platform default: a fresh random key per instance
            key = os.urandom(_TRIPLE_DES_KEY_SIZE)
        if len(key) != _TRIPLE_DES_KEY_SIZE:
            raise ValueError(f"MACTripleDES key must be {_TRIPLE_DES_KEY_SIZE} bytes")
        return _TripleDesMac(key)
    return hashlib.new(_HASHLIB_NAMES[algorithm])


def _consume(obj, stream: BinaryIO, block_size: int) -> None:
    while True:
        chunk = stream.read(block_size)
        if not chunk:
            break
        obj.update(chunk)


def _source_name(source: HashSource) -> str:
    if isinstance(source, FromFile):
        return str(source.path)
    if isinstance(source, FromStream):
        return source.name
    return "<bytes>"


def compute_hash(
    source: HashSource,
    algorithm: HashAlgorithm,
    *,
    key: Optional[bytes] = None,
    block_size: int = HASH_BLOCK_SIZE,
) -> str:
    """
    Compute the digest of `source` and return it as lowercase hex.

    `key` is only used by MACTripleDES. Raises HashError if the algorithm is
    unavailable or the source cannot be opened or read.
    """
    name = _source_name(source)
    try:
        obj = _init_hash_object(algorithm, key)
    except ValueError as e:
        raise HashError(name, algorithm.value, str(e)) from e

    try:
        if isinstance(source, FromBytes):
            obj.update(source.data)
        elif isinstance(source, FromStream):
            _consume(obj, source.stream, block_size)
        else:
            with open(source.path, "rb") as f:
                _consume(obj, f, block_size)
    except OSError as e:
        raise HashError(name, algorithm.value, e.strerror or str(e)) from e

    return obj.hexdigest()


def hash_file(path: Path, algorithm: HashAlgorithm) -> HashOutcome:
    """Hash a file, turning any HashError into a degraded outcome."""
    try:
        digest = compute_hash(FromFile(Path(path)), algorithm)
    except HashError as e:
        logger.warning("Hash calculation failed for %s: %s", path, e.reason)
        return HashOutcome(algorithm=algorithm, digest=None, error=str(e))
    return HashOutcome(algorithm=algorithm, digest=digest)
