"""Credential hashing for the nonce-salted SHA1 login."""

from cryptography.hazmat.primitives import hashes

# Length of a hex-encoded SHA1 digest
SHA1_HEX_LENGTH = 40


def sha1_hex(data: bytes) -> bytes:
    """Return the lowercase hex SHA1 of data as ASCII bytes."""
    digest = hashes.Hash(hashes.SHA1())  # nosec B303
    digest.update(data)
    return digest.finalize().hex().encode()


def sha1_password_hash(password: bytes, nonce: bytes) -> bytes:
    """Hash a password with a server nonce: ``hex(sha1(nonce + hex(sha1(password))))``.

    The password itself never leaves the client; the broker stores ``hex(sha1(password))``
    and repeats the same computation with the nonce it issued.
    """
    return sha1_hex(nonce + sha1_hex(password))
