"""
AES round transformations and single-block encrypt/decrypt.

Every transformation takes a state (list of 4 columns) and returns the next
state; inputs are never modified.

Encryption, Nr = schedule.rounds:
  Round 0:        AddRoundKey
  Rounds 1..Nr-1: SubBytes, ShiftRows, MixColumns, AddRoundKey
  Round Nr:       SubBytes, ShiftRows, AddRoundKey   (no MixColumns)

Decryption walks the round keys from Nr down to 0:
  Round Nr:       AddRoundKey
  Rounds Nr-1..1: InvShiftRows, InvSubBytes, AddRoundKey, InvMixColumns
  Round 0:        InvShiftRows, InvSubBytes, AddRoundKey
"""

from .galois import multiply
from .key_schedule import KeySchedule
from .tables import INV_MIX_MATRIX, INV_SBOX, MIX_MATRIX, SBOX
from .trace import TraceRecorder
from .utils import (
    BLOCK_SIZE,
    State,
    bytes_to_state,
    copy_state,
    state_to_bytes,
    xor_states,
)
from .errors import InvalidBlockSize


# ------------------------------------------------------------------
# Round transformations
# ------------------------------------------------------------------

def sub_bytes(state: State, box: bytes = SBOX) -> State:
    """Substitute every byte through the S-box."""
    return [[box[b] for b in column] for column in state]


def inv_sub_bytes(state: State) -> State:
    """Substitute every byte through the inverse S-box."""
    return sub_bytes(state, INV_SBOX)


def shift_rows(state: State) -> State:
    """
    Rotate row r left by r positions.

      row 0: unchanged
      row 1: s[c][1] <- s[c+1][1]
      row 2: s[c][2] <- s[c+2][2]
      row 3: s[c][3] <- s[c+3][3]
    """
    return [[state[(col + row) % 4][row] for row in range(4)] for col in range(4)]


def inv_shift_rows(state: State) -> State:
    """Rotate row r right by r positions."""
    return [[state[(col - row) % 4][row] for row in range(4)] for col in range(4)]


def mix_single_column(
    column: list[int],
    matrix: tuple[tuple[int, ...], ...] = MIX_MATRIX,
) -> list[int]:
    """
    Multiply one column by a 4x4 matrix in GF(2^8).

    Each output byte is the XOR of four Galois products.
    """
    return [
        multiply(m[0], column[0])
        ^ multiply(m[1], column[1])
        ^ multiply(m[2], column[2])
        ^ multiply(m[3], column[3])
        for m in matrix
    ]


def mix_columns(state: State) -> State:
    """Apply MixColumns to each column."""
    return [mix_single_column(column, MIX_MATRIX) for column in state]


def inv_mix_columns(state: State) -> State:
    """Apply InvMixColumns to each column."""
    return [mix_single_column(column, INV_MIX_MATRIX) for column in state]


def add_round_key(state: State, round_key: State) -> State:
    """XOR state with the round key."""
    return xor_states(state, round_key)


# ------------------------------------------------------------------
# Full cipher on a state
# ------------------------------------------------------------------

def _record(tracer: TraceRecorder | None, direction: str, round_num: int,
            operation: str, state: State) -> None:
    if tracer is not None:
        tracer.record(
            direction=direction,
            round=round_num,
            operation=operation,
            state=copy_state(state),
        )


def encrypt_state(
    state: State,
    schedule: KeySchedule,
    tracer: TraceRecorder | None = None,
) -> State:
    """
    Run the forward cipher on a state.

    Args:
        state: 4x4 input state
        schedule: Expanded key
        tracer: Optional trace recorder, fed the state after every step

    Returns:
        4x4 output state
    """
    rounds = schedule.rounds

    state = add_round_key(state, schedule.round_key(0))
    _record(tracer, "encrypt", 0, "AddRoundKey", state)

    for round_num in range(1, rounds):
        state = sub_bytes(state)
        _record(tracer, "encrypt", round_num, "SubBytes", state)
        state = shift_rows(state)
        _record(tracer, "encrypt", round_num, "ShiftRows", state)
        state = mix_columns(state)
        _record(tracer, "encrypt", round_num, "MixColumns", state)
        state = add_round_key(state, schedule.round_key(round_num))
        _record(tracer, "encrypt", round_num, "AddRoundKey", state)

    # Final round: no MixColumns
    state = sub_bytes(state)
    _record(tracer, "encrypt", rounds, "SubBytes", state)
    state = shift_rows(state)
    _record(tracer, "encrypt", rounds, "ShiftRows", state)
    state = add_round_key(state, schedule.round_key(rounds))
    _record(tracer, "encrypt", rounds, "AddRoundKey", state)

    return state


def decrypt_state(
    state: State,
    schedule: KeySchedule,
    tracer: TraceRecorder | None = None,
) -> State:
    """
    Run the inverse cipher on a state.

    Args:
        state: 4x4 input state
        schedule: Expanded key
        tracer: Optional trace recorder, fed the state after every step

    Returns:
        4x4 output state
    """
    rounds = schedule.rounds

    state = add_round_key(state, schedule.round_key(rounds))
    _record(tracer, "decrypt", rounds, "AddRoundKey", state)

    for round_num in range(rounds - 1, 0, -1):
        state = inv_shift_rows(state)
        _record(tracer, "decrypt", round_num, "InvShiftRows", state)
        state = inv_sub_bytes(state)
        _record(tracer, "decrypt", round_num, "InvSubBytes", state)
        state = add_round_key(state, schedule.round_key(round_num))
        _record(tracer, "decrypt", round_num, "AddRoundKey", state)
        state = inv_mix_columns(state)
        _record(tracer, "decrypt", round_num, "InvMixColumns", state)

    state = inv_shift_rows(state)
    _record(tracer, "decrypt", 0, "InvShiftRows", state)
    state = inv_sub_bytes(state)
    _record(tracer, "decrypt", 0, "InvSubBytes", state)
    state = add_round_key(state, schedule.round_key(0))
    _record(tracer, "decrypt", 0, "AddRoundKey", state)

    return state


# ------------------------------------------------------------------
# Block primitives
# ------------------------------------------------------------------

def encrypt_block(
    block: bytes,
    schedule: KeySchedule,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Encrypt a single 16-byte block.

    Raises:
        InvalidBlockSize: If block is not 16 bytes
    """
    if len(block) != BLOCK_SIZE:
        raise InvalidBlockSize(len(block))
    return state_to_bytes(encrypt_state(bytes_to_state(block), schedule, tracer))


def decrypt_block(
    block: bytes,
    schedule: KeySchedule,
    tracer: TraceRecorder | None = None,
) -> bytes:
    """
    Decrypt a single 16-byte block.

    Raises:
        InvalidBlockSize: If block is not 16 bytes
    """
    if len(block) != BLOCK_SIZE:
        raise InvalidBlockSize(len(block))
    return state_to_bytes(decrypt_state(bytes_to_state(block), schedule, tracer))


class AesBlockCipher:
    """
    The raw AES permutation bound to one key schedule.

    This is the {encrypt_block, decrypt_block} capability that chaining
    modes drive; it knows nothing about padding or IVs.
    """

    block_size = BLOCK_SIZE

    def __init__(self, schedule: KeySchedule, tracer: TraceRecorder | None = None):
        self.schedule = schedule
        self.tracer = tracer

    def encrypt_block(self, block: bytes) -> bytes:
        return encrypt_block(block, self.schedule, self.tracer)

    def decrypt_block(self, block: bytes) -> bytes:
        return decrypt_block(block, self.schedule, self.tracer)

    def __repr__(self) -> str:
        return f"AesBlockCipher(rounds={self.schedule.rounds})"
