"""
Reference AES implementation using PyCryptodome for verification.
"""

from Crypto.Cipher import AES
from Crypto.Util.Padding import pad, unpad

_MODES = {
    "cbc": AES.MODE_CBC,
    "ecb": AES.MODE_ECB,
}


def _check_key(key: bytes) -> None:
    if len(key) not in (16, 24, 32):
        raise ValueError(f"Key must be 16, 24 or 32 bytes, got {len(key)}")


def reference_encrypt_block(key: bytes, block: bytes) -> bytes:
    """
    Encrypt a single 16-byte block with AES-ECB.

    Args:
        key: 16, 24 or 32 byte AES key
        block: 16-byte plaintext block

    Returns:
        16-byte ciphertext
    """
    _check_key(key)
    if len(block) != 16:
        raise ValueError(f"Block must be 16 bytes, got {len(block)}")

    return AES.new(key, AES.MODE_ECB).encrypt(block)


def reference_decrypt_block(key: bytes, block: bytes) -> bytes:
    """Decrypt a single 16-byte block with AES-ECB."""
    _check_key(key)
    if len(block) != 16:
        raise ValueError(f"Block must be 16 bytes, got {len(block)}")

    return AES.new(key, AES.MODE_ECB).decrypt(block)


def _new(key: bytes, mode: str, iv: bytes | None):
    _check_key(key)
    if mode not in _MODES:
        raise ValueError(f"Unsupported reference mode '{mode}'")
    if mode == "ecb":
        return AES.new(key, AES.MODE_ECB)
    if iv is None or len(iv) != 16:
        raise ValueError("CBC reference needs a 16-byte IV")
    return AES.new(key, AES.MODE_CBC, iv=iv)


def reference_encrypt(
    key: bytes,
    plaintext: bytes,
    mode: str = "cbc",
    iv: bytes | None = None,
    padded: bool = True,
) -> bytes:
    """
    Encrypt a whole buffer, PKCS#7-padding it first unless padded=False.

    Args:
        key: 16, 24 or 32 byte AES key
        plaintext: Data to encrypt
        mode: "cbc" or "ecb"
        iv: 16-byte IV for CBC
        padded: Apply PKCS#7 before encrypting

    Returns:
        Ciphertext bytes
    """
    data = pad(plaintext, 16, style="pkcs7") if padded else plaintext
    return _new(key, mode, iv).encrypt(data)


def reference_decrypt(
    key: bytes,
    ciphertext: bytes,
    mode: str = "cbc",
    iv: bytes | None = None,
    padded: bool = True,
) -> bytes:
    """Decrypt a whole buffer and strip PKCS#7 unless padded=False."""
    data = _new(key, mode, iv).decrypt(ciphertext)
    return unpad(data, 16, style="pkcs7") if padded else data


def verify_ciphertext(
    computed: bytes,
    key: bytes,
    plaintext: bytes,
    mode: str = "cbc",
    iv: bytes | None = None,
    padded: bool = True,
) -> bool:
    """
    Verify computed ciphertext against the PyCryptodome reference.

    Returns:
        True if computed matches reference, False otherwise
    """
    expected = reference_encrypt(key, plaintext, mode=mode, iv=iv, padded=padded)
    return computed == expected
