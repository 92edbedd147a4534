"""
Custom exception classes for the DBC signal decoder.

This module provides specific exception types for the different failure
scenarios of loading a message database and decoding frame payloads.
"""

from typing import Any


class SignalDecoderException(Exception):
    """Base exception for all signal decoder errors.

    All custom exceptions inherit from this class so callers can catch every
    decoder-specific error while preserving the exception hierarchy.
    """
    pass


class DbcError(SignalDecoderException):
    """Exception raised for DBC file loading or parsing failures.

    Attributes:
        dbc_path: Path or name of the DBC that failed
        operation: Operation that failed (e.g., 'load', 'parse')
        original_error: The underlying exception that caused this error
    """

    def __init__(self, message: str, dbc_path: str = None, operation: str = None, original_error: Exception = None):
        """Initialize DbcError.

        Args:
            message: Human-readable error message
            dbc_path: Path to DBC file (optional)
            operation: Operation that failed (optional)
            original_error: Underlying exception (optional)
        """
        super().__init__(message)
        self.dbc_path = dbc_path
        self.operation = operation
        self.original_error = original_error


class InvalidSignalError(SignalDecoderException):
    """Exception raised when a signal descriptor cannot be decoded at all.

    Attributes:
        signal_name: Name of the offending signal
        field_name: Descriptor field that is invalid (e.g., 'bit_length')
        value: The invalid value
    """

    def __init__(self, message: str, signal_name: str = None, field_name: str = None, value: Any = None):
        super().__init__(message)
        self.signal_name = signal_name
        self.field_name = field_name
        self.value = value


class ConfigurationError(SignalDecoderException):
    """Exception raised for invalid configuration values.

    Attributes:
        setting_name: Name of the setting that is invalid
        setting_value: The invalid value
        expected: Description of expected value
    """

    def __init__(self, message: str, setting_name: str = None, setting_value: Any = None,
                 expected: str = None):
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error message
            setting_name: Name of invalid setting (optional)
            setting_value: Invalid value (optional)
            expected: Expected value description (optional)
        """
        super().__init__(message)
        self.setting_name = setting_name
        self.setting_value = setting_value
        self.expected = expected


class SignalDecodeError(SignalDecoderException):
    """Exception raised for signal decoding failures.

    Attributes:
        can_id: CAN message ID that failed to decode
        signal_name: Name of signal that failed (if applicable)
        data: Raw data bytes that failed to decode
        original_error: The underlying exception that caused this error
    """

    def __init__(self, message: str, can_id: int = None, signal_name: str = None,
                 data: bytes = None, original_error: Exception = None):
        """Initialize SignalDecodeError.

        Args:
            message: Human-readable error message
            can_id: CAN message ID (optional)
            signal_name: Signal name (optional)
            data: Raw data bytes (optional)
            original_error: Underlying exception (optional)
        """
        super().__init__(message)
        self.can_id = can_id
        self.signal_name = signal_name
        self.data = data
        self.original_error = original_error


class SignalBoundsError(SignalDecodeError):
    """Raised when a signal's bit span does not fit inside the payload.

    Attributes:
        start_bit: Start bit of the signal as stored in the database
        bit_length: Signal width in bits
        payload_length: Payload length in bytes
    """

    def __init__(self, message: str, signal_name: str = None, start_bit: int = None,
                 bit_length: int = None, payload_length: int = None):
        super().__init__(message, signal_name=signal_name)
        self.start_bit = start_bit
        self.bit_length = bit_length
        self.payload_length = payload_length
