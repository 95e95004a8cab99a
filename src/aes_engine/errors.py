"""
Exception types raised by the AES engine.

Every failure derives from AesError, which is a ValueError, so callers that
already guard input validation with ``except ValueError`` keep working.

  AesError
    InvalidKeySize        key length not 16, 24 or 32 bytes
    InvalidBlockSize      block primitive given a non-16-byte block
    InvalidIV             IV missing or not 16 bytes
    InvalidCipherText     ciphertext length not a multiple of the block size
    KeyExpansionFailure   key schedule invariant broken (a bug, not bad input)
    PaddingError
      InvalidSize
      EmptyBuffer
      InvalidPaddingSize
      InvalidPaddingBytes
"""


class AesError(ValueError):
    """Base class for all AES engine failures."""


class InvalidKeySize(AesError):
    """Key length is not one of the AES key sizes."""

    def __init__(self, size: int):
        self.size = size
        super().__init__(
            f"Invalid key size of {size} bytes, expected 16, 24 or 32"
        )


class InvalidBlockSize(AesError):
    """A single-block primitive was handed the wrong number of bytes."""

    def __init__(self, size: int, block_size: int = 16):
        self.size = size
        self.block_size = block_size
        super().__init__(f"Block must be {block_size} bytes, got {size}")


class InvalidIV(AesError):
    """IV is missing or has the wrong length."""

    def __init__(self, size: int | None, block_size: int = 16):
        self.size = size
        self.block_size = block_size
        if size is None:
            message = f"Mode requires a {block_size}-byte IV, none given"
        else:
            message = f"IV must be {block_size} bytes, got {size}"
        super().__init__(message)


class InvalidCipherText(AesError):
    """Ciphertext cannot be split into whole blocks."""

    def __init__(self, size: int, block_size: int = 16):
        self.size = size
        self.block_size = block_size
        super().__init__(
            f"Invalid ciphertext: length {size} is not a multiple of {block_size}"
        )


class KeyExpansionFailure(AesError):
    """Expanded schedule does not have the expected shape."""


class PaddingError(AesError):
    """Base class for padding removal failures."""


class InvalidSize(PaddingError):
    """Padded buffer length is not a multiple of the block size."""

    def __init__(self, size: int, block_size: int = 16):
        self.size = size
        self.block_size = block_size
        super().__init__(
            f"Invalid output size: length {size} is not a multiple of {block_size}"
        )


class EmptyBuffer(PaddingError):
    """Nothing to strip padding from."""

    def __init__(self):
        super().__init__("Invalid padding: empty output buffer")


class InvalidPaddingSize(PaddingError):
    """Trailing pad length byte is zero or larger than a block."""

    def __init__(self, pad_len: int, block_size: int = 16):
        self.pad_len = pad_len
        self.block_size = block_size
        super().__init__(
            f"Invalid padding: incorrect padding size {pad_len} "
            f"(must be 1..{block_size})"
        )


class InvalidPaddingBytes(PaddingError):
    """Pad bytes do not all carry the pad length value."""

    def __init__(self, pad_len: int):
        self.pad_len = pad_len
        super().__init__(
            f"Invalid padding: incorrect padding bytes for pad length {pad_len}"
        )
