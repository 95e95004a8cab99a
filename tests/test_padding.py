"""Tests for PKCS#7 and no-op padding."""

import pytest

from aes_engine.errors import (
    AesError,
    EmptyBuffer,
    InvalidPaddingBytes,
    InvalidPaddingSize,
    InvalidSize,
    PaddingError,
)
from aes_engine.padding import (
    PADDING_SCHEMES,
    NoPadding,
    PaddingScheme,
    Pkcs7Padding,
    get_padding,
    list_padding_schemes,
    pad_input,
    strip_output,
)


class TestPkcs7Pad:
    """Padding always adds 1..16 bytes."""

    @pytest.mark.parametrize("length", range(0, 50))
    def test_padded_length(self, length: int) -> None:
        padded = pad_input(bytes(length))
        assert len(padded) % 16 == 0
        assert 1 <= len(padded) - length <= 16

    def test_aligned_input_gets_full_block(self) -> None:
        padded = pad_input(b"A" * 16)
        assert len(padded) == 32
        assert padded[16:] == bytes([16]) * 16

    def test_empty_input_gets_full_block(self) -> None:
        assert pad_input(b"") == bytes([16]) * 16

    def test_pad_bytes_value(self) -> None:
        assert pad_input(b"YELLOW SUBMARINE!!!") == b"YELLOW SUBMARINE!!!" + bytes([13]) * 13

    def test_small_block_size(self) -> None:
        scheme = Pkcs7Padding(block_size=8)
        assert scheme.pad(b"abc") == b"abc" + bytes([5]) * 5
        assert scheme.strip(b"abc" + bytes([5]) * 5) == b"abc"


class TestPkcs7Strip:
    """strip(pad(x)) == x, and malformed padding is rejected by kind."""

    @pytest.mark.parametrize("length", range(0, 50))
    def test_strip_undoes_pad(self, length: int) -> None:
        data = bytes((i * 7) & 0xFF for i in range(length))
        assert strip_output(pad_input(data)) == data

    @pytest.mark.parametrize("length", [1, 15, 17, 31])
    def test_rejects_unaligned(self, length: int) -> None:
        with pytest.raises(InvalidSize) as excinfo:
            strip_output(bytes([1]) * length)
        assert excinfo.value.size == length

    def test_rejects_empty(self) -> None:
        with pytest.raises(EmptyBuffer, match="empty output buffer"):
            strip_output(b"")

    def test_rejects_zero_pad_length(self) -> None:
        with pytest.raises(InvalidPaddingSize) as excinfo:
            strip_output(bytes(16))
        assert excinfo.value.pad_len == 0

    def test_rejects_oversized_pad_length(self) -> None:
        with pytest.raises(InvalidPaddingSize):
            strip_output(bytes([17]) * 16)

    def test_rejects_inconsistent_pad_bytes(self) -> None:
        data = b"A" * 12 + bytes([4, 4, 3, 4])
        with pytest.raises(InvalidPaddingBytes) as excinfo:
            strip_output(data)
        assert excinfo.value.pad_len == 4

    def test_full_block_of_padding(self) -> None:
        assert strip_output(b"A" * 16 + bytes([16]) * 16) == b"A" * 16

    def test_errors_are_padding_errors(self) -> None:
        for bad in (b"", bytes(15), bytes(16), b"A" * 14 + bytes([1, 2])):
            with pytest.raises(PaddingError):
                strip_output(bad)
            with pytest.raises(AesError):
                strip_output(bad)


class TestNoPadding:
    """NoPadding passes aligned data through and rejects the rest."""

    def test_passthrough(self) -> None:
        scheme = NoPadding()
        data = bytes(range(32))
        assert scheme.pad(data) == data
        assert scheme.strip(data) == data

    def test_empty_is_aligned(self) -> None:
        assert NoPadding().pad(b"") == b""

    @pytest.mark.parametrize("length", [1, 15, 17])
    def test_rejects_unaligned(self, length: int) -> None:
        with pytest.raises(InvalidSize):
            NoPadding().pad(bytes(length))
        with pytest.raises(InvalidSize):
            NoPadding().strip(bytes(length))


class TestPaddingRegistry:
    """Lookup by name."""

    def test_get_padding(self) -> None:
        assert get_padding("pkcs7") is Pkcs7Padding
        assert get_padding("none") is NoPadding

    def test_unknown_padding(self) -> None:
        with pytest.raises(KeyError, match="Unknown padding scheme"):
            get_padding("zeros")

    def test_list_padding_schemes(self) -> None:
        names = [s["name"] for s in list_padding_schemes()]
        assert names == list(PADDING_SCHEMES)
        assert all(s["description"] for s in list_padding_schemes())

    def test_names_match_registry_keys(self) -> None:
        for name, cls in PADDING_SCHEMES.items():
            assert cls.name == name
            assert issubclass(cls, PaddingScheme)

    @pytest.mark.parametrize("block_size", [0, 256, -1])
    def test_rejects_bad_block_size(self, block_size: int) -> None:
        with pytest.raises(ValueError, match="block_size"):
            Pkcs7Padding(block_size=block_size)

    def test_base_class_is_abstract(self) -> None:
        with pytest.raises(TypeError):
            PaddingScheme()  # type: ignore[abstract]
