"""
Tests for CBC and ECB chaining.

Covers the NIST SP 800-38A CBC vectors, round trips for every key size,
ciphertext length validation and padding tamper detection.
"""

import random

import pytest

from aes_engine.aes_core import AesBlockCipher, encrypt_block
from aes_engine.cipher import decrypt, encrypt
from aes_engine.errors import (
    InvalidBlockSize,
    InvalidCipherText,
    InvalidIV,
    InvalidPaddingBytes,
    InvalidPaddingSize,
    InvalidSize,
    PaddingError,
)
from aes_engine.key_schedule import new_key_schedule
from aes_engine.modes import (
    MODES,
    BlockMode,
    CbcMode,
    EcbMode,
    get_mode,
    list_modes,
)
from aes_engine.reference import reference_encrypt
from aes_engine.utils import split_blocks, xor_bytes
from aes_engine.vectors import CBC_TEST_VECTORS


KEY_0_15 = bytes(range(16))
PT_BLOCK = bytes.fromhex("00112233445566778899aabbccddeeff")
IV_TEXT = b"fGxSWd59AYdiQXZS"


def random_bytes(n: int, rng: random.Random) -> bytes:
    """Generate n random bytes."""
    return bytes(rng.randint(0, 255) for _ in range(n))


class TestCbcFixedVector:
    """CBC with key [0..15] and a fixed ASCII IV."""

    def test_first_block(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        blocks = encrypt(schedule, "cbc", "pkcs7", PT_BLOCK, iv=IV_TEXT)

        assert len(blocks) == 2
        assert blocks[0] == bytes.fromhex("3b4388864f4ebd728996cf94ba7582b2")

    def test_first_block_is_e_of_pt_xor_iv(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        blocks = encrypt(schedule, "cbc", "pkcs7", PT_BLOCK, iv=IV_TEXT)
        assert blocks[0] == encrypt_block(xor_bytes(PT_BLOCK, IV_TEXT), schedule)
        assert blocks[1] == encrypt_block(xor_bytes(bytes([16]) * 16, blocks[0]), schedule)

    def test_matches_library(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        blocks = encrypt(schedule, "cbc", "pkcs7", PT_BLOCK, iv=IV_TEXT)
        assert b"".join(blocks) == reference_encrypt(KEY_0_15, PT_BLOCK, iv=IV_TEXT)

    def test_round_trip(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        blocks = encrypt(schedule, "cbc", "pkcs7", PT_BLOCK, iv=IV_TEXT)
        assert decrypt(schedule, "cbc", b"".join(blocks), iv=IV_TEXT) == PT_BLOCK


class TestSp80038aVectors:
    """NIST SP 800-38A F.2 CBC vectors for AES-128/192/256."""

    @pytest.mark.parametrize("vec", CBC_TEST_VECTORS)
    def test_encrypt_unpadded(self, vec: dict) -> None:
        schedule = new_key_schedule(vec["key"])
        blocks = encrypt(schedule, "cbc", "none", vec["plaintext"], iv=vec["iv"])
        assert b"".join(blocks) == vec["ciphertext"]

    @pytest.mark.parametrize("vec", CBC_TEST_VECTORS)
    def test_decrypt_unpadded(self, vec: dict) -> None:
        schedule = new_key_schedule(vec["key"])
        plaintext = decrypt(schedule, "cbc", vec["ciphertext"], iv=vec["iv"],
                            padding_scheme="none")
        assert plaintext == vec["plaintext"]

    @pytest.mark.parametrize("vec", CBC_TEST_VECTORS)
    def test_pkcs7_adds_one_block(self, vec: dict) -> None:
        schedule = new_key_schedule(vec["key"])
        ciphertext = b"".join(
            encrypt(schedule, "cbc", "pkcs7", vec["plaintext"], iv=vec["iv"])
        )
        assert len(ciphertext) == len(vec["ciphertext"]) + 16
        assert ciphertext[:64] == vec["ciphertext"]
        assert decrypt(schedule, "cbc", ciphertext, iv=vec["iv"]) == vec["plaintext"]


class TestCbcRoundTrip:
    """decrypt(encrypt(m)) == m for all key sizes and many lengths."""

    @pytest.mark.parametrize("key_size", [16, 24, 32])
    def test_lengths(self, key_size: int) -> None:
        rng = random.Random(key_size)
        schedule = new_key_schedule(random_bytes(key_size, rng))
        iv = random_bytes(16, rng)

        for length in list(range(0, 40)) + [100, 255, 1024]:
            plaintext = random_bytes(length, rng)
            blocks = encrypt(schedule, "cbc", "pkcs7", plaintext, iv=iv)
            assert len(blocks) == length // 16 + 1
            assert all(len(b) == 16 for b in blocks)
            assert decrypt(schedule, "cbc", b"".join(blocks), iv=iv) == plaintext

    @pytest.mark.parametrize("seed", range(5))
    def test_matches_library(self, seed: int) -> None:
        rng = random.Random(seed)
        key = random_bytes(rng.choice((16, 24, 32)), rng)
        iv = random_bytes(16, rng)
        plaintext = random_bytes(rng.randint(0, 100), rng)

        blocks = encrypt(new_key_schedule(key), "cbc", "pkcs7", plaintext, iv=iv)
        assert b"".join(blocks) == reference_encrypt(key, plaintext, iv=iv)

    def test_identical_blocks_differ_in_cbc(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        blocks = encrypt(schedule, "cbc", "none", b"\x00" * 48, iv=IV_TEXT)
        assert len(set(blocks)) == 3


class TestCiphertextValidation:
    """Length and IV checks on decrypt."""

    @pytest.mark.parametrize("length", [1, 15, 17, 33])
    def test_rejects_partial_block(self, length: int) -> None:
        schedule = new_key_schedule(KEY_0_15)
        with pytest.raises(InvalidCipherText) as excinfo:
            decrypt(schedule, "cbc", bytes(length), iv=IV_TEXT)
        assert excinfo.value.size == length

    def test_length_checked_before_iv(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        with pytest.raises(InvalidCipherText):
            decrypt(schedule, "cbc", bytes(15), iv=None)

    def test_empty_ciphertext_has_no_padding(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        with pytest.raises(PaddingError):
            decrypt(schedule, "cbc", b"", iv=IV_TEXT)

    def test_cbc_requires_iv(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        with pytest.raises(InvalidIV, match="none given"):
            encrypt(schedule, "cbc", "pkcs7", b"data")
        with pytest.raises(InvalidIV):
            decrypt(schedule, "cbc", bytes(16))

    @pytest.mark.parametrize("iv_len", [0, 8, 15, 17, 32])
    def test_rejects_bad_iv_length(self, iv_len: int) -> None:
        schedule = new_key_schedule(KEY_0_15)
        with pytest.raises(InvalidIV) as excinfo:
            encrypt(schedule, "cbc", "pkcs7", b"data", iv=bytes(iv_len))
        assert excinfo.value.size == iv_len

    def test_unpadded_encrypt_rejects_partial_block(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        with pytest.raises(InvalidSize):
            encrypt(schedule, "cbc", "none", bytes(20), iv=IV_TEXT)


class TestTamperDetection:
    """Flipping bits in the penultimate block corrupts the padding."""

    @pytest.fixture
    def sealed(self) -> tuple:
        schedule = new_key_schedule(KEY_0_15)
        # 16 bytes of data -> last plaintext block is a full block of 0x10
        ciphertext = b"".join(encrypt(schedule, "cbc", "pkcs7", b"a" * 16, iv=IV_TEXT))
        return schedule, bytearray(ciphertext)

    def test_pad_length_zeroed(self, sealed: tuple) -> None:
        schedule, ciphertext = sealed
        ciphertext[15] ^= 0x10
        with pytest.raises(InvalidPaddingSize):
            decrypt(schedule, "cbc", bytes(ciphertext), iv=IV_TEXT)

    def test_pad_byte_altered(self, sealed: tuple) -> None:
        schedule, ciphertext = sealed
        ciphertext[14] ^= 0x01
        with pytest.raises(InvalidPaddingBytes):
            decrypt(schedule, "cbc", bytes(ciphertext), iv=IV_TEXT)

    def test_untampered_decrypts(self, sealed: tuple) -> None:
        schedule, ciphertext = sealed
        assert decrypt(schedule, "cbc", bytes(ciphertext), iv=IV_TEXT) == b"a" * 16


class TestEcb:
    """ECB: independent blocks, no IV."""

    def test_identical_blocks_leak(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        blocks = encrypt(schedule, "ecb", "none", PT_BLOCK * 3)
        assert blocks == [encrypt_block(PT_BLOCK, schedule)] * 3

    def test_matches_library(self) -> None:
        key = bytes(range(32))
        plaintext = b"The quick brown fox jumps over the lazy dog"
        blocks = encrypt(new_key_schedule(key), "ecb", "pkcs7", plaintext)
        assert b"".join(blocks) == reference_encrypt(key, plaintext, mode="ecb")

    def test_round_trip_ignores_iv(self) -> None:
        schedule = new_key_schedule(KEY_0_15)
        ciphertext = b"".join(encrypt(schedule, "ecb", "pkcs7", b"hello"))
        assert decrypt(schedule, "ecb", ciphertext) == b"hello"
        assert decrypt(schedule, "ecb", ciphertext, iv=bytes(3)) == b"hello"


class TestModeObjects:
    """Mode classes and registry."""

    def test_cbc_blocks_directly(self) -> None:
        cipher = AesBlockCipher(new_key_schedule(KEY_0_15))
        blocks = split_blocks(bytes(range(48)))
        out = CbcMode().encrypt_blocks(blocks, cipher, IV_TEXT)
        assert CbcMode().decrypt_blocks(out, cipher, IV_TEXT) == blocks

    def test_decrypt_chains_on_ciphertext(self) -> None:
        """Corrupting C[0] garbles P[0] fully and flips the same bit in P[1]."""
        cipher = AesBlockCipher(new_key_schedule(KEY_0_15))
        blocks = split_blocks(bytes(range(48)))
        out = CbcMode().encrypt_blocks(blocks, cipher, IV_TEXT)

        out[0] = bytes([out[0][0] ^ 0x01]) + out[0][1:]
        recovered = CbcMode().decrypt_blocks(out, cipher, IV_TEXT)
        assert recovered[0] != blocks[0]
        assert recovered[1] == bytes([blocks[1][0] ^ 0x01]) + blocks[1][1:]
        assert recovered[2] == blocks[2]

    @pytest.mark.parametrize("size", [0, 15, 17])
    def test_cbc_rejects_short_block(self, size: int) -> None:
        cipher = AesBlockCipher(new_key_schedule(KEY_0_15))
        with pytest.raises(InvalidBlockSize) as excinfo:
            CbcMode().encrypt_blocks([bytes(16), bytes(size)], cipher, IV_TEXT)
        assert excinfo.value.size == size
        with pytest.raises(InvalidBlockSize):
            CbcMode().decrypt_blocks([bytes(size)], cipher, IV_TEXT)

    def test_ecb_rejects_short_block(self) -> None:
        cipher = AesBlockCipher(new_key_schedule(KEY_0_15))
        with pytest.raises(InvalidBlockSize):
            EcbMode().encrypt_blocks([bytes(15)], cipher)

    def test_get_mode(self) -> None:
        assert get_mode("cbc") is CbcMode
        assert get_mode("ecb") is EcbMode

    def test_unknown_mode(self) -> None:
        with pytest.raises(KeyError, match="Unknown mode"):
            get_mode("ctr")

    def test_requires_iv_flags(self) -> None:
        assert CbcMode.requires_iv
        assert not EcbMode.requires_iv

    def test_list_modes(self) -> None:
        assert [m["name"] for m in list_modes()] == list(MODES)
        for name, cls in MODES.items():
            assert cls.name == name
            assert issubclass(cls, BlockMode)

    def test_repr(self) -> None:
        assert repr(CbcMode()) == "CbcMode(name='cbc')"
