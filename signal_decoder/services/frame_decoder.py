"""
Frame decoder turning payload bytes into physical signal values.

Decoding a signal happens in three steps:
1. Bit-field extraction: pack the payload into one integer using the
   signal's byte order, locate the signal's least significant bit, shift
   and mask to ``bit_length`` bits.
2. Sign reconstruction: reinterpret the field as two's complement when
   the signal is signed.
3. Physical scaling: ``offset + value * factor``.

The decoder holds no mutable state, so one instance can be shared between
threads and payload buffers are never modified.
"""
import logging
from enum import Enum
from typing import Union

from signal_decoder.constants import SINGLE_BIT_CONSTANT_VALUE
from signal_decoder.exceptions import ConfigurationError, SignalBoundsError
from signal_decoder.models.signal_descriptor import SignalDescriptor
from signal_decoder.utils.bits import (
    BytesLike,
    as_signed,
    extract_bits,
    pack_big_endian,
    pack_little_endian,
)

logger = logging.getLogger(__name__)


class SingleBitPolicy(Enum):
    """How 1-bit signals are turned into physical values.

    LITERAL decodes the bit's actual 0/1 content and scales it like any other
    signal. CONSTANT always yields 1.0, matching older tooling that treated
    every 1-bit signal as a presence flag.
    """

    LITERAL = 'literal'
    CONSTANT = 'constant'


class FrameDecoder:
    """Decode signals from CAN frame payloads of any length up to 64 bytes.

    Attributes:
        single_bit_policy: Handling of 1-bit signals in ``decode``
    """

    def __init__(self, single_bit_policy: Union[SingleBitPolicy, str] = SingleBitPolicy.LITERAL):
        """Initialize the decoder.

        Args:
            single_bit_policy: SingleBitPolicy member or its string value

        Raises:
            ConfigurationError: If the policy name is unknown
        """
        if not isinstance(single_bit_policy, SingleBitPolicy):
            try:
                single_bit_policy = SingleBitPolicy(str(single_bit_policy).lower())
            except ValueError as e:
                raise ConfigurationError(
                    f"Unknown single-bit policy: {single_bit_policy!r}",
                    setting_name='single_bit_policy', setting_value=single_bit_policy,
                    expected=', '.join(p.value for p in SingleBitPolicy)) from e
        self.single_bit_policy = single_bit_policy

    def extract_raw(self, payload: BytesLike, signal: SignalDescriptor) -> int:
        """Return the signal's bits right-aligned as an unsigned integer.

        Raises:
            SignalBoundsError: If the signal's bit span is not inside the payload
        """
        byte_count = len(payload)
        lsb_index, msb_index = signal.bit_span(byte_count)
        if lsb_index < 0 or msb_index >= byte_count * 8:
            logger.debug(
                f"Signal {signal.name} (start={signal.start_bit}, length={signal.bit_length}, "
                f"{signal.byte_order.value}) spans bits {lsb_index}..{msb_index} of a {byte_count}-byte payload"
            )
            raise SignalBoundsError(
                f"Signal {signal.name!r} exceeds payload bounds: start bit {signal.start_bit}, "
                f"length {signal.bit_length}, payload {byte_count} bytes",
                signal_name=signal.name, start_bit=signal.start_bit,
                bit_length=signal.bit_length, payload_length=byte_count)

        if signal.is_big_endian:
            packed = pack_big_endian(payload)
        else:
            packed = pack_little_endian(payload)
        return extract_bits(packed, lsb_index, signal.bit_length)

    def decode_raw(self, payload: BytesLike, signal: SignalDescriptor) -> int:
        """Return the signal's integer value with its sign applied, before scaling."""
        raw = self.extract_raw(payload, signal)
        if signal.is_signed:
            return as_signed(raw, signal.bit_length)
        return raw

    def decode(self, payload: BytesLike, signal: SignalDescriptor) -> float:
        """Decode one signal into its physical value.

        Args:
            payload: Frame payload bytes
            signal: Descriptor of the signal to decode

        Returns:
            ``offset + value * factor`` as a float

        Raises:
            SignalBoundsError: If the signal's bit span is not inside the payload
        """
        return self.to_physical(self.decode_raw(payload, signal), signal)

    def to_physical(self, value: int, signal: SignalDescriptor) -> float:
        """Apply the linear transform (and the 1-bit policy) to a decoded integer."""
        if signal.bit_length == 1 and self.single_bit_policy is SingleBitPolicy.CONSTANT:
            return SINGLE_BIT_CONSTANT_VALUE
        return float(signal.offset + value * signal.factor)


_default_decoder = FrameDecoder()


def decode(payload: BytesLike, signal: SignalDescriptor) -> float:
    """Decode one signal with a default (literal 1-bit) decoder."""
    return _default_decoder.decode(payload, signal)
