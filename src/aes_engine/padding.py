"""Padding schemes that bring plaintext to a whole number of blocks."""

from abc import ABC, abstractmethod

from .errors import (
    EmptyBuffer,
    InvalidPaddingBytes,
    InvalidPaddingSize,
    InvalidSize,
)
from .utils import BLOCK_SIZE


class PaddingScheme(ABC):
    """Abstract base class for padding schemes.

    A scheme is a {pad, strip} pair; strip(pad(x)) == x for every x the
    scheme accepts.
    """

    name: str = "base"
    description: str = "Base padding scheme (abstract)"

    def __init__(self, block_size: int = BLOCK_SIZE):
        if not 1 <= block_size <= 255:
            raise ValueError(f"block_size must be 1..255, got {block_size}")
        self.block_size = block_size

    @abstractmethod
    def pad(self, data: bytes) -> bytes:
        """Return data extended to a multiple of the block size."""
        raise NotImplementedError

    @abstractmethod
    def strip(self, data: bytes) -> bytes:
        """Return data with padding removed, validating it on the way."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(block_size={self.block_size})"


class Pkcs7Padding(PaddingScheme):
    """PKCS#7 padding.

    Always appends 1..block_size bytes, each equal to the number of bytes
    appended. Aligned input gets a full block of padding.
    """

    name = "pkcs7"
    description = "PKCS#7: append N bytes of value N (1 <= N <= block size)"

    def pad(self, data: bytes) -> bytes:
        pad_len = self.block_size - (len(data) % self.block_size)
        return bytes(data) + bytes([pad_len]) * pad_len

    def strip(self, data: bytes) -> bytes:
        """Remove PKCS#7 padding.

        Raises:
            InvalidSize: If length is not a multiple of the block size
            EmptyBuffer: If data is empty
            InvalidPaddingSize: If the pad length byte is 0 or > block size
            InvalidPaddingBytes: If the pad bytes are inconsistent
        """
        if len(data) % self.block_size != 0:
            raise InvalidSize(len(data), self.block_size)
        if not data:
            raise EmptyBuffer()

        pad_len = data[-1]
        if pad_len == 0 or pad_len > self.block_size:
            raise InvalidPaddingSize(pad_len, self.block_size)
        if data[-pad_len:] != bytes([pad_len]) * pad_len:
            raise InvalidPaddingBytes(pad_len)

        return bytes(data[:-pad_len])


class NoPadding(PaddingScheme):
    """No padding: input must already be block aligned."""

    name = "none"
    description = "No padding; data must be a multiple of the block size"

    def pad(self, data: bytes) -> bytes:
        if len(data) % self.block_size != 0:
            raise InvalidSize(len(data), self.block_size)
        return bytes(data)

    def strip(self, data: bytes) -> bytes:
        if len(data) % self.block_size != 0:
            raise InvalidSize(len(data), self.block_size)
        return bytes(data)


# Registry of available padding schemes
PADDING_SCHEMES: dict[str, type[PaddingScheme]] = {
    "pkcs7": Pkcs7Padding,
    "none": NoPadding,
}


def get_padding(name: str) -> type[PaddingScheme]:
    """Get padding scheme class by name.

    Raises:
        KeyError: If scheme not found
    """
    if name not in PADDING_SCHEMES:
        available = ", ".join(PADDING_SCHEMES.keys())
        raise KeyError(f"Unknown padding scheme '{name}'. Available: {available}")
    return PADDING_SCHEMES[name]


def list_padding_schemes() -> list[dict[str, str]]:
    """List all padding schemes with descriptions."""
    return [
        {"name": name, "description": cls.description}
        for name, cls in PADDING_SCHEMES.items()
    ]


_PKCS7 = Pkcs7Padding()


def pad_input(data: bytes) -> bytes:
    """PKCS#7-pad data to a multiple of 16 bytes."""
    return _PKCS7.pad(data)


def strip_output(data: bytes) -> bytes:
    """Strip and validate PKCS#7 padding from a multiple of 16 bytes."""
    return _PKCS7.strip(data)
