import pytest

from signal_decoder.utils.bits import (
    as_signed,
    big_endian_lsb_index,
    big_endian_msb_index,
    extract_bits,
    mask,
    pack_big_endian,
    pack_little_endian,
)

COUNTING = bytes([0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07, 0x08])


def test_pack_classic_frame():
    assert pack_little_endian(COUNTING) == 0x0807060504030201
    assert pack_big_endian(COUNTING) == 0x0102030405060708


def test_pack_short_and_long_payloads_match_int_from_bytes():
    assert pack_little_endian(b'\x01\x02\x03') == 0x030201
    assert pack_big_endian(b'\x01\x02\x03') == 0x010203
    fd = bytes(range(64))
    assert pack_little_endian(fd) == int.from_bytes(fd, 'little')
    assert pack_big_endian(fd) == int.from_bytes(fd, 'big')
    assert pack_little_endian(b'') == 0


@pytest.mark.parametrize("start_bit, byte_count, expected", [
    (7, 8, 63),    # MSB of byte 0
    (0, 8, 56),    # LSB of byte 0
    (63, 8, 7),    # MSB of byte 7
    (56, 8, 0),    # LSB of byte 7
    (23, 8, 47),   # MSB of byte 2
    (7, 64, 511),  # MSB of byte 0 in a CAN FD frame
    (7, 1, 7),
])
def test_big_endian_msb_index(start_bit, byte_count, expected):
    assert big_endian_msb_index(start_bit, byte_count) == expected


def test_big_endian_lsb_index():
    assert big_endian_lsb_index(7, 8, 8) == 56
    assert big_endian_lsb_index(0, 8, 8) == 49
    assert big_endian_lsb_index(7, 16, 8) == 48
    assert big_endian_lsb_index(7, 64, 8) == 0
    # runs past the last byte
    assert big_endian_lsb_index(56, 2, 8) == -1


def test_extract_bits():
    assert extract_bits(0xABCD, 4, 8) == 0xBC
    assert extract_bits(0xABCD, 0, 16) == 0xABCD
    assert extract_bits(0xFFFF_FFFF_FFFF_FFFF_FF, 8, 64) == mask(64)


@pytest.mark.parametrize("raw, bit_length, expected", [
    (0xFF, 8, -1),
    (0x7F, 8, 127),
    (0x80, 8, -128),
    (0x8000, 16, -32768),
    (0x7FFF, 16, 32767),
    (0xFFFFFFFF, 32, -1),
    (1 << 63, 64, -(1 << 63)),
    (0x800, 12, -2048),
    (0x7FF, 12, 2047),
    (0xFFF, 12, -1),
    (0b101, 3, -3),
    (1, 1, -1),
    (0, 1, 0),
    ((1 << 63) - 1, 63, -1),
])
def test_as_signed(raw, bit_length, expected):
    assert as_signed(raw, bit_length) == expected
