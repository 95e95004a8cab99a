"""
Block chaining modes.

A mode drives a block cipher ({encrypt_block, decrypt_block}) over an
ordered list of whole blocks. Padding is applied before encryption and
removed after decryption by the caller (see cipher.py).

CBC:
  encrypt:  C[i] = E(P[i] ^ chain);  chain = C[i]         (chain starts at IV)
  decrypt:  P[i] = D(C[i]) ^ chain;  chain = C[i]

ECB:
  every block independently; no IV
"""

from abc import ABC, abstractmethod
from typing import Protocol

from .errors import InvalidBlockSize, InvalidIV
from .utils import BLOCK_SIZE, xor_bytes


class BlockCipher(Protocol):
    """What a mode needs from the underlying cipher."""

    block_size: int

    def encrypt_block(self, block: bytes) -> bytes: ...

    def decrypt_block(self, block: bytes) -> bytes: ...


class BlockMode(ABC):
    """Abstract base class for chaining modes."""

    name: str = "base"
    description: str = "Base chaining mode (abstract)"
    requires_iv: bool = False

    @abstractmethod
    def encrypt_blocks(
        self,
        blocks: list[bytes],
        cipher: BlockCipher,
        iv: bytes | None = None,
    ) -> list[bytes]:
        """Encrypt an ordered list of whole blocks."""
        raise NotImplementedError

    @abstractmethod
    def decrypt_blocks(
        self,
        blocks: list[bytes],
        cipher: BlockCipher,
        iv: bytes | None = None,
    ) -> list[bytes]:
        """Decrypt an ordered list of whole blocks."""
        raise NotImplementedError

    def validate_iv(self, iv: bytes | None) -> None:
        """Check the IV against the mode's requirements.

        Raises:
            InvalidIV: If the mode needs an IV and iv is missing or not 16 bytes
        """
        if not self.requires_iv:
            return
        if iv is None:
            raise InvalidIV(None)
        if len(iv) != BLOCK_SIZE:
            raise InvalidIV(len(iv))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"


class CbcMode(BlockMode):
    """Cipher Block Chaining."""

    name = "cbc"
    description = "Cipher Block Chaining (16-byte IV, chained XOR)"
    requires_iv = True

    def encrypt_blocks(self, blocks, cipher, iv=None):
        self.validate_iv(iv)
        chain = bytes(iv)
        out = []
        for index, block in enumerate(blocks):
            _check_block(cipher, block)
            _start_block(cipher, index)
            chain = cipher.encrypt_block(xor_bytes(block, chain))
            out.append(chain)
        return out

    def decrypt_blocks(self, blocks, cipher, iv=None):
        self.validate_iv(iv)
        chain = bytes(iv)
        out = []
        for index, block in enumerate(blocks):
            _check_block(cipher, block)
            _start_block(cipher, index)
            out.append(xor_bytes(cipher.decrypt_block(block), chain))
            # chain on the received ciphertext, not the decrypted output
            chain = block
        return out


class EcbMode(BlockMode):
    """Electronic Codebook: each block enciphered on its own."""

    name = "ecb"
    description = "Electronic Codebook (no IV, identical blocks leak)"
    requires_iv = False

    def encrypt_blocks(self, blocks, cipher, iv=None):
        out = []
        for index, block in enumerate(blocks):
            _start_block(cipher, index)
            out.append(cipher.encrypt_block(block))
        return out

    def decrypt_blocks(self, blocks, cipher, iv=None):
        out = []
        for index, block in enumerate(blocks):
            _start_block(cipher, index)
            out.append(cipher.decrypt_block(block))
        return out


def _check_block(cipher: BlockCipher, block: bytes) -> None:
    if len(block) != cipher.block_size:
        raise InvalidBlockSize(len(block), cipher.block_size)


def _start_block(cipher: BlockCipher, index: int) -> None:
    """Tell an attached tracer which block is being processed."""
    tracer = getattr(cipher, "tracer", None)
    if tracer is not None:
        tracer.start_block(index)


# Registry of available modes
MODES: dict[str, type[BlockMode]] = {
    "cbc": CbcMode,
    "ecb": EcbMode,
}


def get_mode(name: str) -> type[BlockMode]:
    """Get mode class by name.

    Raises:
        KeyError: If mode not found
    """
    if name not in MODES:
        available = ", ".join(MODES.keys())
        raise KeyError(f"Unknown mode '{name}'. Available: {available}")
    return MODES[name]


def list_modes() -> list[dict[str, str]]:
    """List all chaining modes with descriptions."""
    return [
        {"name": name, "description": cls.description}
        for name, cls in MODES.items()
    ]
