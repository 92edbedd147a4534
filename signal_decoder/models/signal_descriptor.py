"""
Signal descriptor model describing where a signal lives inside a payload.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

from signal_decoder.constants import SIGNAL_BIT_LENGTH_MAX, SIGNAL_BIT_LENGTH_MIN
from signal_decoder.exceptions import InvalidSignalError
from signal_decoder.utils.bits import big_endian_lsb_index, big_endian_msb_index


class ByteOrder(Enum):
    """Bit numbering convention of a signal."""

    BIG_ENDIAN = 'big_endian'  # Motorola
    LITTLE_ENDIAN = 'little_endian'  # Intel


class ValueType(Enum):
    """Integer interpretation of a signal's raw bits."""

    SIGNED = 'signed'
    UNSIGNED = 'unsigned'


@dataclass(frozen=True)
class SignalDescriptor:
    """Layout and scaling of a single signal within a CAN frame.

    Attributes:
        name: Signal name from the DBC
        start_bit: Start bit as stored in the DBC. For little-endian signals
                   this is the least significant bit; for big-endian signals it
                   is the most significant bit in row/column numbering.
        bit_length: Width of the signal in bits (1-64)
        byte_order: Motorola or Intel numbering
        value_type: Signed or unsigned interpretation
        factor: Linear scale factor
        offset: Linear offset
        unit: Engineering unit (informational)
        minimum: Declared minimum physical value (informational)
        maximum: Declared maximum physical value (informational)
    """
    name: str
    start_bit: int
    bit_length: int
    byte_order: ByteOrder = ByteOrder.LITTLE_ENDIAN
    value_type: ValueType = ValueType.UNSIGNED
    factor: float = 1.0
    offset: float = 0.0
    unit: str = ''
    minimum: Optional[float] = None
    maximum: Optional[float] = None

    def __post_init__(self):
        """Reject layouts the decoder cannot handle."""
        if not isinstance(self.bit_length, int) or not (
                SIGNAL_BIT_LENGTH_MIN <= self.bit_length <= SIGNAL_BIT_LENGTH_MAX):
            raise InvalidSignalError(
                f"Signal {self.name!r}: bit_length must be between {SIGNAL_BIT_LENGTH_MIN} "
                f"and {SIGNAL_BIT_LENGTH_MAX}, got {self.bit_length!r}",
                signal_name=self.name, field_name='bit_length', value=self.bit_length)
        if not isinstance(self.start_bit, int) or self.start_bit < 0:
            raise InvalidSignalError(
                f"Signal {self.name!r}: start_bit must be a non-negative integer, got {self.start_bit!r}",
                signal_name=self.name, field_name='start_bit', value=self.start_bit)
        if not isinstance(self.byte_order, ByteOrder):
            raise InvalidSignalError(
                f"Signal {self.name!r}: unknown byte order {self.byte_order!r}",
                signal_name=self.name, field_name='byte_order', value=self.byte_order)
        if not isinstance(self.value_type, ValueType):
            raise InvalidSignalError(
                f"Signal {self.name!r}: unknown value type {self.value_type!r}",
                signal_name=self.name, field_name='value_type', value=self.value_type)

    @property
    def is_signed(self) -> bool:
        return self.value_type is ValueType.SIGNED

    @property
    def is_big_endian(self) -> bool:
        return self.byte_order is ByteOrder.BIG_ENDIAN

    def bit_span(self, byte_count: int) -> Tuple[int, int]:
        """Return ``(lsb_index, msb_index)`` of the signal in the packed payload.

        Indices count from bit 0 of the packed integer built for this
        signal's byte order. Either index may fall outside
        ``[0, byte_count * 8)`` when the signal does not fit the payload.
        """
        if self.is_big_endian:
            return (big_endian_lsb_index(self.start_bit, self.bit_length, byte_count),
                    big_endian_msb_index(self.start_bit, byte_count))
        return self.start_bit, self.start_bit + self.bit_length - 1

    @classmethod
    def from_cantools(cls, signal: Any) -> 'SignalDescriptor':
        """Build a descriptor from a ``cantools.database.can.Signal``."""
        byte_order = ByteOrder.BIG_ENDIAN if signal.byte_order == 'big_endian' else ByteOrder.LITTLE_ENDIAN
        value_type = ValueType.SIGNED if signal.is_signed else ValueType.UNSIGNED
        return cls(
            name=signal.name,
            start_bit=int(signal.start),
            bit_length=int(signal.length),
            byte_order=byte_order,
            value_type=value_type,
            factor=float(signal.scale),
            offset=float(signal.offset),
            unit=signal.unit or '',
            minimum=signal.minimum,
            maximum=signal.maximum,
        )
