"""Encoding, hashing and randomness bindings."""

from __future__ import annotations

import base64
import binascii
import hashlib
import secrets


HASH_ALGORITHMS = {
    "md5": "md5",
    "sha1": "sha1",
    "sha224": "sha224",
    "sha256": "sha256",
    "sha384": "sha384",
    "sha512": "sha512",
    "sha3-224": "sha3_224",
    "sha3-256": "sha3_256",
    "sha3-384": "sha3_384",
    "sha3-512": "sha3_512",
}


def _to_bytes(data: str | bytes) -> bytes:
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode("utf-8", errors="surrogateescape")
    raise TypeError(f"bad argument #1 (string expected, got {type(data).__name__})")


def base64encode(data: str | bytes) -> str:
    return base64.b64encode(_to_bytes(data)).decode("ascii")


def base64decode(data: str | bytes) -> bytes:
    try:
        return base64.b64decode(_to_bytes(data), validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 data: {exc}") from exc


def generatebytes(size: int) -> str:
    if size < 0:
        raise ValueError("invalid size: must not be negative")
    return base64encode(secrets.token_bytes(size))


def generatekey() -> str:
    return generatebytes(32)


def hash(data: str | bytes, algorithm: str) -> str:  # noqa: A001 - executor API name
    name = HASH_ALGORITHMS.get(str(algorithm).lower())
    if name is None:
        raise ValueError(f"unsupported hash algorithm {algorithm!r}")
    return hashlib.new(name, _to_bytes(data)).hexdigest()


def build_table() -> dict[str, object]:
    """Return the ``crypt`` table with its nested aliases."""

    return {
        "base64encode": base64encode,
        "base64decode": base64decode,
        "base64_encode": base64encode,
        "base64_decode": base64decode,
        "base64": {"encode": base64encode, "decode": base64decode},
        "generatebytes": generatebytes,
        "generatekey": generatekey,
        "hash": hash,
    }
