"""Probes for the ``crypt`` library."""

from __future__ import annotations

from typing import Any, Mapping

from audit.namespace import Namespace
from audit.suite import ProbeSuite
from catalog import check, raises


FOX = "The quick brown fox jumps over the lazy dog"
FOX_DIGESTS = {
    "md5": "9e107d9d372bb6826bd81d3542a419d6",
    "sha1": "2fd4e1c67a2d28fced849ee1bb76e7391b93eb12",
    "sha256": "d7a8fbb307d7809469ca9abcb0082e4f8d5651e46d3cdb762d02d0bf37c9e592",
}
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

BASE64_CASES = {
    "Hello, World!": "SGVsbG8sIFdvcmxkIQ==",
    "": "",
    "a": "YQ==",
    "ab": "YWI=",
    "abc": "YWJj",
    "\0\1\2": "AAEC",
}


def _as_text(value: Any) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="surrogateescape")
    return value


def register(suite: ProbeSuite, env: Namespace, settings: Mapping[str, Any]) -> None:
    @suite.check(
        "crypt.base64encode",
        "crypt.base64.encode",
        "crypt.base64_encode",
        "base64.encode",
        "base64_encode",
    )
    def base64encode() -> str:
        encode = env.resolve("crypt.base64encode")
        decode = env.resolve("crypt.base64decode")
        for plain, expected in BASE64_CASES.items():
            check(encode(plain) == expected, f"Encoding {plain!r} failed")
        big = "A" * 10000
        check(_as_text(decode(encode(big))) == big, "Large data roundtrip failed")
        return "base64encode extreme"

    @suite.check(
        "crypt.base64decode",
        "crypt.base64.decode",
        "crypt.base64_decode",
        "base64.decode",
        "base64_decode",
    )
    def base64decode() -> str:
        decode = env.resolve("crypt.base64decode")
        for expected, encoded in BASE64_CASES.items():
            check(_as_text(decode(encoded)) == expected, f"Decoding {encoded!r} failed")
        check(raises(decode, "Invalid!!"), "Invalid base64 should error")
        return "base64decode extreme"

    @suite.check("crypt.encrypt")
    def encrypt() -> str:
        encrypt_fn = env.resolve("crypt.encrypt")
        decrypt_fn = env.resolve("crypt.decrypt")
        key = env.resolve("crypt.generatekey")()
        encrypted, iv = encrypt_fn("secret data", key)
        check(iv, "IV should be returned")
        check(_as_text(decrypt_fn(encrypted, key, iv)) == "secret data", "Decryption with generated IV failed")
        encrypted_empty, iv_empty = encrypt_fn("", key)
        check(_as_text(decrypt_fn(encrypted_empty, key, iv_empty)) == "", "Empty string encryption failed")
        return "encrypt extreme"

    @suite.check("crypt.decrypt")
    def decrypt() -> str:
        encrypt_fn = env.resolve("crypt.encrypt")
        decrypt_fn = env.resolve("crypt.decrypt")
        generatekey = env.resolve("crypt.generatekey")
        key, iv = generatekey(), generatekey()
        encrypted = encrypt_fn("test", key, iv)
        if isinstance(encrypted, tuple):
            encrypted = encrypted[0]
        check(_as_text(decrypt_fn(encrypted, key, iv)) == "test", "Basic decryption failed")
        check(raises(decrypt_fn, encrypted, generatekey(), iv), "Decrypt with wrong key should error")
        return "decrypt extreme"

    @suite.check("crypt.generatebytes")
    def generatebytes() -> str:
        generate = env.resolve("crypt.generatebytes")
        decode = env.resolve("crypt.base64decode")
        for size in (0, 1, 16, 32, 64, 128, 256, 1024):
            decoded = decode(generate(size))
            check(len(decoded) == size, f"Size {size}: got {len(decoded)}")
        check(generate(16) != generate(16), "Bytes should be random")
        return "generatebytes extreme"

    @suite.check("crypt.generatekey")
    def generatekey() -> str:
        generate = env.resolve("crypt.generatekey")
        decode = env.resolve("crypt.base64decode")
        first, second = generate(), generate()
        check(first != second, "Keys should be random")
        check(len(decode(first)) == 32, "Key should decode to 32 bytes")
        return "generatekey extreme"

    @suite.check("crypt.hash")
    def hash_probe() -> str:
        digest = env.resolve("crypt.hash")
        for algorithm, expected in FOX_DIGESTS.items():
            check(digest(FOX, algorithm).lower() == expected, f"{algorithm} hash mismatch")
        check(digest("", "sha256").lower() == EMPTY_SHA256, "Empty string hash")
        check(raises(digest, "test", "invalid"), "Invalid algorithm should error")
        return "hash extreme"
