"""
GF(2^8) arithmetic for AES.

Field: GF(2)[x] / (x^8 + x^4 + x^3 + x + 1), i.e. modulus 0x11B.
Bytes are polynomials with bit i as the coefficient of x^i; addition is XOR.

MixColumns only needs multiply(). The remaining helpers (inverse, affine)
rebuild the S-box from its definition so the hardcoded tables can be checked.
"""

AES_MODULUS = 0x11B
AES_REDUCTION = 0x1B  # low 8 bits of the modulus; applied after the shift


def multiply(a: int, b: int) -> int:
    """
    Multiply two bytes in GF(2^8).

    Shift-and-add: accumulate `a` when the low bit of `b` is set, then
    multiply `a` by x (shift left, reduce by 0x1B on overflow) and move to
    the next bit of `b`.

    Args:
        a: Byte value (0-255)
        b: Byte value (0-255)

    Returns:
        Product as a byte
    """
    a &= 0xFF
    b &= 0xFF
    p = 0
    for _ in range(8):
        if b & 1:
            p ^= a
        high_bit = a & 0x80
        a = (a << 1) & 0xFF
        b >>= 1
        if high_bit:
            a ^= AES_REDUCTION
    return p


def xtime(a: int) -> int:
    """Multiply by x (i.e. by 0x02) in GF(2^8)."""
    a &= 0xFF
    return ((a << 1) ^ AES_REDUCTION) & 0xFF if a & 0x80 else (a << 1) & 0xFF


def power(a: int, n: int) -> int:
    """Raise `a` to the non-negative integer power `n` in GF(2^8)."""
    if n < 0:
        raise ValueError(f"Exponent must be non-negative, got {n}")
    result = 1
    base = a & 0xFF
    while n:
        if n & 1:
            result = multiply(result, base)
        base = multiply(base, base)
        n >>= 1
    return result


def inverse(a: int) -> int:
    """
    Multiplicative inverse in GF(2^8).

    The multiplicative group has order 255, so a^-1 = a^254. Zero has no
    inverse and maps to zero, as the S-box definition requires.
    """
    if a & 0xFF == 0:
        return 0
    return power(a, 254)


def rotl8(x: int, n: int) -> int:
    """Rotate an 8-bit value left by n bits."""
    x &= 0xFF
    n &= 7
    return ((x << n) | (x >> (8 - n))) & 0xFF


def affine(u: int) -> int:
    """
    Rijndael affine transform:
      y = 0x63 ^ u ^ rotl(u,1) ^ rotl(u,2) ^ rotl(u,3) ^ rotl(u,4)
    """
    u &= 0xFF
    return 0x63 ^ u ^ rotl8(u, 1) ^ rotl8(u, 2) ^ rotl8(u, 3) ^ rotl8(u, 4)


def sbox_value(x: int) -> int:
    """Forward S-box entry computed from its definition: affine(x^-1)."""
    return affine(inverse(x))


def round_constants(count: int) -> list[int]:
    """
    Key schedule round constants rc_1..rc_count.

    rc_1 = 0x01 and rc_j = x * rc_{j-1}.
    """
    constants = []
    rc = 0x01
    for _ in range(count):
        constants.append(rc)
        rc = xtime(rc)
    return constants
