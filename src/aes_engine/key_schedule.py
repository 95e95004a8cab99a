"""
AES key expansion (FIPS-197 section 5.2).

A 16/24/32-byte key is split into Nk = 4/6/8 words and expanded to
4 * (Nr + 1) words, Nr = 10/12/14:

  for i >= Nk:
    temp = w[i-1]
    if i % Nk == 0:              temp = SubWord(RotWord(temp)) ^ Rcon[i/Nk]
    elif Nk == 8 and i % Nk == 4: temp = SubWord(temp)
    w[i] = w[i-Nk] ^ temp

Round key r is words [4r, 4r+4), read as a 4x4 state (one word per column).
"""

import logging

from .errors import InvalidKeySize, KeyExpansionFailure
from .tables import RCON, SBOX
from .utils import State, rotate_left

logger = logging.getLogger(__name__)

# Words per block (Nb)
BLOCK_WORDS = 4

# Key length in bytes -> number of rounds
KEY_ROUNDS = {
    16: 10,
    24: 12,
    32: 14,
}

Word = tuple[int, int, int, int]


def rot_word(word: list[int]) -> list[int]:
    """Rotate a 4-byte word left by one byte."""
    return rotate_left(list(word), 1)


def sub_word(word: list[int]) -> list[int]:
    """Apply the forward S-box to each byte of a word."""
    return [SBOX[b] for b in word]


def expand_key(key: bytes) -> list[Word]:
    """
    Expand a key into its full word schedule.

    Args:
        key: 16, 24 or 32 byte AES key

    Returns:
        List of 44, 52 or 60 four-byte words

    Raises:
        InvalidKeySize: If key length is not 16, 24 or 32
    """
    if len(key) not in KEY_ROUNDS:
        raise InvalidKeySize(len(key))

    nk = len(key) // 4
    rounds = KEY_ROUNDS[len(key)]
    total = BLOCK_WORDS * (rounds + 1)

    words: list[Word] = [tuple(key[4 * i:4 * i + 4]) for i in range(nk)]

    for i in range(nk, total):
        temp = list(words[i - 1])
        if i % nk == 0:
            temp = sub_word(rot_word(temp))
            temp[0] ^= RCON[i // nk - 1]
        elif nk == 8 and i % nk == 4:
            temp = sub_word(temp)
        words.append(tuple(w ^ t for w, t in zip(words[i - nk], temp)))

    return words


class KeySchedule:
    """
    Expanded AES key.

    Built once per key and never mutated afterwards. Round keys handed out
    by round_key() are fresh lists, so callers cannot alter the schedule.
    """

    __slots__ = ("_key_size", "_rounds", "_words")

    def __init__(self, key: bytes):
        """
        Validate the key and expand it.

        Args:
            key: 16, 24 or 32 raw key bytes

        Raises:
            InvalidKeySize: If key length is not 16, 24 or 32
        """
        key = bytes(key)
        if len(key) not in KEY_ROUNDS:
            raise InvalidKeySize(len(key))

        self._key_size = len(key)
        self._rounds = KEY_ROUNDS[len(key)]
        self._words: tuple[Word, ...] = tuple(expand_key(key))

        expected = BLOCK_WORDS * (self._rounds + 1)
        if len(self._words) != expected:
            raise KeyExpansionFailure(
                f"Expanded {len(self._words)} words, expected {expected}"
            )

        logger.debug(
            "Expanded AES-%d key into %d words (%d rounds)",
            self._key_size * 8, len(self._words), self._rounds,
        )

    @property
    def key_size(self) -> int:
        """Key length in bytes."""
        return self._key_size

    @property
    def rounds(self) -> int:
        """Number of cipher rounds (10, 12 or 14)."""
        return self._rounds

    @property
    def words(self) -> tuple[Word, ...]:
        """The full word schedule."""
        return self._words

    def round_key(self, round_num: int) -> State:
        """
        Get the round key for a given round as a 4x4 state.

        Args:
            round_num: Round index in [0, rounds]

        Returns:
            4 columns of 4 bytes

        Raises:
            IndexError: If round_num is out of range
        """
        if not 0 <= round_num <= self._rounds:
            raise IndexError(
                f"Round {round_num} out of range 0..{self._rounds}"
            )
        start = BLOCK_WORDS * round_num
        return [list(word) for word in self._words[start:start + BLOCK_WORDS]]

    def round_keys(self) -> list[State]:
        """All round keys, round 0 first."""
        return [self.round_key(r) for r in range(self._rounds + 1)]

    def __repr__(self) -> str:
        return f"KeySchedule(key_size={self._key_size}, rounds={self._rounds})"


def new_key_schedule(key: bytes) -> KeySchedule:
    """
    Build the key schedule for a key.

    Raises:
        InvalidKeySize: If key length is not 16, 24 or 32
    """
    return KeySchedule(key)


def key_expansion(key: bytes) -> list[State]:
    """Expand a key straight to its list of round-key states."""
    return KeySchedule(key).round_keys()
