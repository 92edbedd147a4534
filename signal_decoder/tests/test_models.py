import pytest

from signal_decoder.exceptions import InvalidSignalError
from signal_decoder.models import ByteOrder, CanFrame, Message, SignalDescriptor, SignalValue, ValueType


@pytest.mark.parametrize("bit_length", [0, 65, -1, 8.0])
def test_signal_descriptor_rejects_unsupported_width(bit_length):
    with pytest.raises(InvalidSignalError) as exc_info:
        SignalDescriptor(name='Bad', start_bit=0, bit_length=bit_length)
    assert exc_info.value.field_name == 'bit_length'
    assert exc_info.value.signal_name == 'Bad'


def test_signal_descriptor_rejects_negative_start_bit():
    with pytest.raises(InvalidSignalError) as exc_info:
        SignalDescriptor(name='Bad', start_bit=-1, bit_length=8)
    assert exc_info.value.field_name == 'start_bit'


def test_signal_descriptor_requires_enums():
    with pytest.raises(InvalidSignalError):
        SignalDescriptor(name='Bad', start_bit=0, bit_length=8, byte_order='big_endian')
    with pytest.raises(InvalidSignalError):
        SignalDescriptor(name='Bad', start_bit=0, bit_length=8, value_type='signed')


def test_signal_descriptor_defaults_and_flags():
    sig = SignalDescriptor(name='S', start_bit=0, bit_length=64)
    assert sig.byte_order is ByteOrder.LITTLE_ENDIAN
    assert sig.value_type is ValueType.UNSIGNED
    assert sig.factor == 1.0
    assert sig.offset == 0.0
    assert not sig.is_signed
    assert not sig.is_big_endian


def test_signal_descriptor_is_immutable():
    sig = SignalDescriptor(name='S', start_bit=0, bit_length=8)
    with pytest.raises(AttributeError):
        sig.start_bit = 4


def test_bit_span():
    le = SignalDescriptor(name='S', start_bit=4, bit_length=12)
    assert le.bit_span(8) == (4, 15)
    be = SignalDescriptor(name='S', start_bit=23, bit_length=12, byte_order=ByteOrder.BIG_ENDIAN)
    assert be.bit_span(8) == (36, 47)
    assert be.bit_span(4) == (4, 15)
    assert be.bit_span(3) == (-4, 7)


def test_message_signal_lookup():
    speed = SignalDescriptor(name='Speed', start_bit=0, bit_length=16)
    flag = SignalDescriptor(name='Flag', start_bit=16, bit_length=1)
    msg = Message(frame_id=0x100, name='Status', length=8, signals=(speed, flag))
    assert msg.signal_names == ('Speed', 'Flag')
    assert msg.get_signal('Flag') is flag
    assert msg.get_signal('Missing') is None


def test_can_frame_validation():
    frame = CanFrame(can_id=0x100, data=b'\x01\x02')
    assert frame.data_hex == '0102'
    assert frame.data_length == 2
    assert not frame.is_fd
    assert CanFrame(can_id=0x1FFFFFFF, data=bytes(64)).is_fd

    with pytest.raises(ValueError):
        CanFrame(can_id=0x100, data=bytes(65))
    with pytest.raises(ValueError):
        CanFrame(can_id=0x20000000, data=b'')
    with pytest.raises(TypeError):
        CanFrame(can_id=0x100, data='0102')


def test_signal_value_key_and_str():
    sv = SignalValue(signal_name='Speed', value=100.0, message_id=256, unit='km/h')
    assert sv.key == '256:Speed'
    assert str(sv) == 'Speed=100.0 km/h'
    assert str(SignalValue(signal_name='Flag', value=1.0, message_id=256)) == 'Flag=1.0'

    with pytest.raises(ValueError):
        SignalValue(signal_name='', value=0.0, message_id=256)
