"""
Whole-buffer AES encryption and decryption.

Functional API:
    schedule = new_key_schedule(key)
    blocks = encrypt(schedule, "cbc", "pkcs7", plaintext, iv=iv)
    plaintext = decrypt(schedule, "cbc", b"".join(blocks), iv=iv)

Object API (key, mode, padding and IV bound once):
    cipher = Cipher(key)              # random IV from the OS CSPRNG
    ciphertext = cipher.encrypt(plaintext)
    plaintext = cipher.decrypt(ciphertext)

IV transport: this layer never embeds the IV in encrypt()/decrypt()
output. Cipher.seal() / Cipher.unseal() implement the one convention the
package supports for carrying it: a fresh IV prepended to the ciphertext.
"""

from __future__ import annotations

import logging
import secrets

from .aes_core import AesBlockCipher
from .config import CipherConfig
from .errors import InvalidCipherText
from .key_schedule import KeySchedule, new_key_schedule
from .modes import BlockMode, get_mode
from .padding import PaddingScheme, get_padding
from .trace import TraceRecorder
from .utils import BLOCK_SIZE, split_blocks

logger = logging.getLogger(__name__)


def generate_iv() -> bytes:
    """Draw a fresh 16-byte IV from the OS CSPRNG."""
    return secrets.token_bytes(BLOCK_SIZE)


def resolve_mode(mode: str | BlockMode) -> BlockMode:
    """Accept a mode name or instance and return an instance."""
    if isinstance(mode, BlockMode):
        return mode
    return get_mode(mode.lower())()


def resolve_padding(padding: str | PaddingScheme) -> PaddingScheme:
    """Accept a padding scheme name or instance and return an instance."""
    if isinstance(padding, PaddingScheme):
        return padding
    return get_padding(padding.lower())()


def encrypt(
    schedule: KeySchedule,
    mode: str | BlockMode,
    padding_scheme: str | PaddingScheme,
    plaintext: bytes,
    iv: bytes | None = None,
    tracer: TraceRecorder | None = None,
) -> list[bytes]:
    """
    Pad and encrypt a whole buffer.

    Args:
        schedule: Expanded key
        mode: Chaining mode name ("cbc", "ecb") or instance
        padding_scheme: Padding name ("pkcs7", "none") or instance
        plaintext: Data to encrypt
        iv: 16-byte IV, required by CBC
        tracer: Optional trace recorder for per-round states

    Returns:
        Ordered list of 16-byte ciphertext blocks

    Raises:
        InvalidIV: If the mode needs an IV and none/bad one is given
        InvalidSize: If padding is "none" and plaintext is not aligned
    """
    block_mode = resolve_mode(mode)
    padding = resolve_padding(padding_scheme)
    block_mode.validate_iv(iv)

    padded = padding.pad(plaintext)
    blocks = split_blocks(padded)
    logger.debug(
        "Encrypting %d bytes as %d blocks (mode=%s, padding=%s)",
        len(plaintext), len(blocks), block_mode.name, padding.name,
    )
    return block_mode.encrypt_blocks(blocks, AesBlockCipher(schedule, tracer), iv)


def decrypt(
    schedule: KeySchedule,
    mode: str | BlockMode,
    ciphertext: bytes,
    iv: bytes | None = None,
    padding_scheme: str | PaddingScheme = "pkcs7",
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Decrypt a whole buffer and strip its padding.

    The length check happens before any block is touched, and padding is
    validated over the complete plaintext; nothing is returned unless the
    whole operation succeeds.

    Raises:
        InvalidCipherText: If len(ciphertext) is not a multiple of 16
        InvalidIV: If the mode needs an IV and none/bad one is given
        PaddingError: If the recovered padding is malformed
    """
    if len(ciphertext) % BLOCK_SIZE != 0:
        raise InvalidCipherText(len(ciphertext))

    block_mode = resolve_mode(mode)
    padding = resolve_padding(padding_scheme)
    block_mode.validate_iv(iv)

    blocks = split_blocks(bytes(ciphertext))
    logger.debug(
        "Decrypting %d blocks (mode=%s, padding=%s)",
        len(blocks), block_mode.name, padding.name,
    )
    plain_blocks = block_mode.decrypt_blocks(blocks, AesBlockCipher(schedule, tracer), iv)
    return padding.strip(b"".join(plain_blocks))


class Cipher:
    """
    AES encryptor bound to one key, chaining mode, padding scheme and IV.

    The key is validated before anything else is built. For modes that
    need one, the IV is taken from the caller or drawn from the OS CSPRNG.

    The chain value lives only inside a single encrypt/decrypt call, so
    one instance never carries state from one call to the next.
    """

    def __init__(
        self,
        key: bytes,
        mode: str | BlockMode = "cbc",
        padding: str | PaddingScheme = "pkcs7",
        iv: bytes | None = None,
        tracer: TraceRecorder | None = None,
    ):
        self.schedule = new_key_schedule(key)
        self.mode = resolve_mode(mode)
        self.padding = resolve_padding(padding)
        self.tracer = tracer

        if self.mode.requires_iv:
            self.iv = bytes(iv) if iv is not None else generate_iv()
            self.mode.validate_iv(self.iv)
        else:
            if iv is not None:
                logger.debug("Mode %s takes no IV; ignoring the one given", self.mode.name)
            self.iv = None

    @classmethod
    def from_config(
        cls,
        key: bytes,
        config: CipherConfig,
        iv: bytes | None = None,
        tracer: TraceRecorder | None = None,
    ) -> Cipher:
        """Build a Cipher from a CipherConfig."""
        return cls(key, mode=config.mode, padding=config.padding, iv=iv, tracer=tracer)

    @property
    def rounds(self) -> int:
        return self.schedule.rounds

    def encrypt_blocks(self, plaintext: bytes) -> list[bytes]:
        """Encrypt with the bound IV, returning the block sequence."""
        return encrypt(self.schedule, self.mode, self.padding, plaintext,
                       iv=self.iv, tracer=self.tracer)

    def encrypt(self, plaintext: bytes) -> bytes:
        """Encrypt with the bound IV. The IV is not included in the output."""
        return b"".join(self.encrypt_blocks(plaintext))

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Decrypt ciphertext produced by encrypt() with the same IV."""
        return decrypt(self.schedule, self.mode, ciphertext, iv=self.iv,
                       padding_scheme=self.padding, tracer=self.tracer)

    def seal(self, plaintext: bytes) -> bytes:
        """
        Encrypt under a fresh IV and prepend it: IV || ciphertext.

        Modes without an IV return the bare ciphertext.
        """
        if not self.mode.requires_iv:
            return self.encrypt(plaintext)
        iv = generate_iv()
        blocks = encrypt(self.schedule, self.mode, self.padding, plaintext,
                         iv=iv, tracer=self.tracer)
        return iv + b"".join(blocks)

    def unseal(self, data: bytes) -> bytes:
        """
        Split off the leading IV and decrypt the rest.

        Raises:
            InvalidCipherText: If data is shorter than one IV or the
                remainder is not a whole number of blocks
        """
        if not self.mode.requires_iv:
            return self.decrypt(data)
        if len(data) < BLOCK_SIZE:
            raise InvalidCipherText(len(data))
        iv, ciphertext = data[:BLOCK_SIZE], data[BLOCK_SIZE:]
        return decrypt(self.schedule, self.mode, ciphertext, iv=iv,
                       padding_scheme=self.padding, tracer=self.tracer)

    def __repr__(self) -> str:
        return (
            f"Cipher(key_size={self.schedule.key_size}, mode={self.mode.name!r}, "
            f"padding={self.padding.name!r})"
        )
