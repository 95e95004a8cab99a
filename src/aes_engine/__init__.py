"""
AES Block Cipher Engine

From-scratch AES-128/192/256:
1. GF(2^8) arithmetic and fixed S-box / MixColumns tables
2. Key schedule for 16, 24 and 32 byte keys
3. Round pipeline for single-block encrypt/decrypt
4. CBC and ECB chaining with PKCS#7 padding
"""

__version__ = "1.0.0"

# Default AES-128 test values from FIPS-197 Appendix C.1
DEFAULT_KEY_HEX = "000102030405060708090a0b0c0d0e0f"
DEFAULT_PT_HEX = "00112233445566778899aabbccddeeff"
DEFAULT_CT_HEX = "69c4e0d86a7b0430d8cdb78070b4c55a"

from .errors import (  # noqa: E402
    AesError,
    EmptyBuffer,
    InvalidBlockSize,
    InvalidCipherText,
    InvalidIV,
    InvalidKeySize,
    InvalidPaddingBytes,
    InvalidPaddingSize,
    InvalidSize,
    KeyExpansionFailure,
    PaddingError,
)
from .key_schedule import KeySchedule, new_key_schedule  # noqa: E402
from .aes_core import AesBlockCipher, decrypt_block, encrypt_block  # noqa: E402
from .padding import Pkcs7Padding, NoPadding, pad_input, strip_output  # noqa: E402
from .modes import CbcMode, EcbMode  # noqa: E402
from .config import CipherConfig  # noqa: E402
from .cipher import Cipher, decrypt, encrypt, generate_iv  # noqa: E402

__all__ = [
    "AesBlockCipher",
    "AesError",
    "CbcMode",
    "Cipher",
    "CipherConfig",
    "EcbMode",
    "EmptyBuffer",
    "InvalidBlockSize",
    "InvalidCipherText",
    "InvalidIV",
    "InvalidKeySize",
    "InvalidPaddingBytes",
    "InvalidPaddingSize",
    "InvalidSize",
    "KeyExpansionFailure",
    "KeySchedule",
    "NoPadding",
    "PaddingError",
    "Pkcs7Padding",
    "decrypt",
    "decrypt_block",
    "encrypt",
    "encrypt_block",
    "generate_iv",
    "new_key_schedule",
    "pad_input",
    "strip_output",
]
