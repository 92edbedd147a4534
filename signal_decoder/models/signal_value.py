"""
Signal Value model for representing decoded CAN signal values.
"""
from dataclasses import dataclass
from typing import Optional

from signal_decoder.constants import CAN_ID_MAX, CAN_ID_MIN


@dataclass
class SignalValue:
    """Represents a decoded signal value from a CAN message.

    Attributes:
        signal_name: Name of the signal from DBC
        value: Physical value (offset + raw * factor)
        message_id: CAN message ID where signal was found
        message_name: Name of the CAN message (optional)
        unit: Engineering unit of the value
        timestamp: Timestamp when the frame was received or decoded
        raw_value: Integer value before scaling (sign already applied)
    """
    signal_name: str
    value: float
    message_id: int
    message_name: Optional[str] = None
    unit: str = ''
    timestamp: Optional[float] = None
    raw_value: Optional[int] = None

    def __post_init__(self):
        """Validate signal value data."""
        if not self.signal_name:
            raise ValueError("signal_name cannot be empty")
        if not (CAN_ID_MIN <= self.message_id <= CAN_ID_MAX):
            raise ValueError(f"message_id out of range: 0x{self.message_id:X}")

    @property
    def key(self) -> str:
        """Return a cache key for this signal (message_id:signal_name)."""
        return f"{self.message_id}:{self.signal_name}"

    def __str__(self) -> str:
        """String representation for display."""
        if self.unit:
            return f"{self.signal_name}={self.value} {self.unit}"
        return f"{self.signal_name}={self.value}"
