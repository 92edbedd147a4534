"""
Data models for the DBC signal decoder.

This package contains the value objects shared between the message database
and the frame decoder, decoupling the core from any parser's in-memory types.

Models:
- SignalDescriptor: Layout and scaling of one signal (with ByteOrder, ValueType)
- Message: Ordered signals of one frame identifier
- CanFrame: A received CAN frame payload
- SignalValue: A decoded physical value with metadata
"""

from signal_decoder.models.can_frame import CanFrame
from signal_decoder.models.message import Message
from signal_decoder.models.signal_descriptor import ByteOrder, SignalDescriptor, ValueType
from signal_decoder.models.signal_value import SignalValue

__all__ = ['ByteOrder', 'CanFrame', 'Message', 'SignalDescriptor', 'SignalValue', 'ValueType']
