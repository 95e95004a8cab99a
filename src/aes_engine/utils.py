"""
Utility functions for byte/state conversions, block splitting and hex formatting.

AES state is 4x4 bytes stored as a list of columns:
  state[col][row] where row, col in [0..3]

Mapping from a 16-byte block:
  byte[0]  -> state[0][0]
  byte[1]  -> state[0][1]
  byte[2]  -> state[0][2]
  byte[3]  -> state[0][3]
  byte[4]  -> state[1][0]
  ...
  byte[15] -> state[3][3]

so each column is one 32-bit word of the block, the same shape as a
key schedule word.
"""

from .errors import InvalidBlockSize

BLOCK_SIZE = 16

State = list[list[int]]


def bytes_to_state(data: bytes) -> State:
    """
    Convert 16 bytes to a 4x4 AES state (list of columns).

    Args:
        data: 16 bytes of input

    Returns:
        4 columns of 4 integers (0-255)

    Raises:
        InvalidBlockSize: If data is not 16 bytes
    """
    if len(data) != BLOCK_SIZE:
        raise InvalidBlockSize(len(data))
    return [list(data[col * 4:col * 4 + 4]) for col in range(4)]


def state_to_bytes(state: State) -> bytes:
    """Convert a 4x4 AES state back to 16 bytes."""
    return bytes(b for column in state for b in column)


def hex_to_bytes(hex_str: str) -> bytes:
    """
    Convert hex string to bytes.

    Whitespace is ignored so grouped dumps ("00112233 44556677") parse too.
    """
    return bytes.fromhex("".join(hex_str.split()))


def bytes_to_hex(data: bytes) -> str:
    """Convert bytes to a lowercase hex string."""
    return data.hex()


def state_to_hex(state: State) -> str:
    """Convert state to hex string (via bytes)."""
    return bytes_to_hex(state_to_bytes(state))


def hex_to_state(hex_str: str) -> State:
    """Convert hex string to state."""
    return bytes_to_state(hex_to_bytes(hex_str))


def format_state_grid(state: State) -> str:
    """
    Format state as a readable 4x4 grid, one AES row per line.

    Returns multi-line string like:
      00 44 88 cc
      11 55 99 dd
      22 66 aa ee
      33 77 bb ff
    """
    lines = []
    for row in range(4):
        row_hex = [f"{state[col][row]:02x}" for col in range(4)]
        lines.append("  " + " ".join(row_hex))
    return "\n".join(lines)


def format_state_words(state: State) -> str:
    """Format state as 4 space-separated 32-bit words (one per column)."""
    return " ".join("".join(f"{b:02x}" for b in column) for column in state)


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte sequences of equal length."""
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} vs {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))


def xor_states(a: State, b: State) -> State:
    """XOR two 4x4 states element-wise."""
    return [[x ^ y for x, y in zip(col_a, col_b)] for col_a, col_b in zip(a, b)]


def copy_state(state: State) -> State:
    """Deep copy a 4x4 state."""
    return [column[:] for column in state]


def rotate_left(word: list[int], n: int) -> list[int]:
    """Cyclically rotate a list left by n positions."""
    if not word:
        return []
    n %= len(word)
    return word[n:] + word[:n]


def split_blocks(data: bytes, block_size: int = BLOCK_SIZE) -> list[bytes]:
    """
    Split data into consecutive blocks.

    The caller guarantees len(data) is a multiple of block_size.
    """
    return [data[i:i + block_size] for i in range(0, len(data), block_size)]
