"""
DBC signal decoder.

Decodes CAN frame payloads into physical values using signal layouts loaded
from a DBC file. Typical use::

    from signal_decoder import DbcService, FrameDecoder

    dbc = DbcService()
    dbc.load_dbc_file('vehicle.dbc')
    decoder = FrameDecoder()
    message = dbc.find_message_by_id(0x100)
    for signal in message.signals:
        print(signal.name, decoder.decode(payload, signal))
"""

from signal_decoder.models import ByteOrder, CanFrame, Message, SignalDescriptor, SignalValue, ValueType
from signal_decoder.services import DbcService, FrameDecoder, SignalService, SingleBitPolicy
from signal_decoder.services.dbc_service import load, load_file
from signal_decoder.services.frame_decoder import decode

__all__ = [
    'ByteOrder',
    'CanFrame',
    'DbcService',
    'FrameDecoder',
    'Message',
    'SignalDescriptor',
    'SignalService',
    'SignalValue',
    'SingleBitPolicy',
    'ValueType',
    'decode',
    'load',
    'load_file',
]
