"""
Bit-level helpers for packing payloads and extracting signal fields.

Every function here is pure so the numbering conventions can be tested in
isolation from the decoder itself.

Two packing conventions are used:
- little-endian (Intel): byte 0 is the least significant byte of the
  packed integer, so a signal's start bit indexes the packed integer directly
- big-endian (Motorola): byte 0 is the most significant byte, and the DBC
  start bit is a row/column pair that must be inverted to find the bit in
  the packed integer
"""
import struct
from typing import Union

from signal_decoder.constants import CAN_FRAME_MAX_LENGTH

BytesLike = Union[bytes, bytearray, memoryview]

# (unsigned, signed) struct format codes keyed by bit width
_NATIVE_FORMATS = {
    8: ('B', 'b'),
    16: ('H', 'h'),
    32: ('I', 'i'),
    64: ('Q', 'q'),
}


def mask(bit_length: int) -> int:
    """Return an integer with the low ``bit_length`` bits set."""
    return (1 << bit_length) - 1


def pack_little_endian(payload: BytesLike) -> int:
    """Pack a payload into one unsigned integer, byte 0 least significant.

    Classic 8-byte frames go through a native 64-bit unpack; any other length
    falls back to an arbitrary precision integer.
    """
    if len(payload) == CAN_FRAME_MAX_LENGTH:
        return struct.unpack('<Q', payload)[0]
    return int.from_bytes(payload, byteorder='little', signed=False)


def pack_big_endian(payload: BytesLike) -> int:
    """Pack a payload into one unsigned integer, byte 0 most significant."""
    if len(payload) == CAN_FRAME_MAX_LENGTH:
        return struct.unpack('>Q', payload)[0]
    return int.from_bytes(payload, byteorder='big', signed=False)


def big_endian_msb_index(start_bit: int, byte_count: int) -> int:
    """Locate a Motorola start bit inside a big-endian packed integer.

    The DBC start bit of a big-endian signal names its most significant bit
    as ``row = start_bit // 8`` (byte index counted from the first byte of
    the payload) and ``column = start_bit % 8``. The packed integer is indexed
    from its least significant bit, so the row is inverted.

    Args:
        start_bit: Start bit as stored in the DBC
        byte_count: Number of bytes in the payload

    Returns:
        Index of the signal's most significant bit, counted from bit 0 of the
        packed integer
    """
    row = start_bit // 8
    column = start_bit % 8
    inverted_row = byte_count - 1 - row
    return inverted_row * 8 + column


def big_endian_lsb_index(start_bit: int, bit_length: int, byte_count: int) -> int:
    """Return the packed-integer index of a Motorola signal's least significant bit.

    The result is negative when the signal would run past the end of the
    payload; callers are expected to check it before shifting.
    """
    return big_endian_msb_index(start_bit, byte_count) + 1 - bit_length


def extract_bits(packed: int, lsb_index: int, bit_length: int) -> int:
    """Right-align ``bit_length`` bits of ``packed`` starting at ``lsb_index``."""
    return (packed >> lsb_index) & mask(bit_length)


def as_signed(raw: int, bit_length: int) -> int:
    """Reinterpret a ``bit_length``-bit field as a two's-complement integer.

    Widths of 8, 16, 32 and 64 bits are reinterpreted through the matching
    native signed type. Other widths are decoded by inverting the magnitude
    bits below the sign bit, adding one and negating.

    Args:
        raw: Unsigned field value, already masked to ``bit_length`` bits
        bit_length: Field width in bits (1-64)

    Returns:
        Signed integer value
    """
    formats = _NATIVE_FORMATS.get(bit_length)
    if formats is not None:
        unsigned_fmt, signed_fmt = formats
        return struct.unpack('<' + signed_fmt, struct.pack('<' + unsigned_fmt, raw))[0]

    sign_bit = 1 << (bit_length - 1)
    if raw & sign_bit == 0:
        return raw
    return -(((~raw) & (sign_bit - 1)) + 1)
