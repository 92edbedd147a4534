"""
Utility modules for bit-level payload handling.

This package contains:
- bits: Payload packing, Motorola start-bit inversion, field extraction and
  two's-complement reconstruction
"""

from signal_decoder.utils.bits import (
    as_signed,
    big_endian_lsb_index,
    big_endian_msb_index,
    extract_bits,
    pack_big_endian,
    pack_little_endian,
)

__all__ = [
    'as_signed',
    'big_endian_lsb_index',
    'big_endian_msb_index',
    'extract_bits',
    'pack_big_endian',
    'pack_little_endian',
]
