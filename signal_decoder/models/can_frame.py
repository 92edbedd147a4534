"""
CAN Frame model for representing received frame payloads.
"""
from dataclasses import dataclass
from typing import Optional

from signal_decoder.constants import CAN_FD_FRAME_MAX_LENGTH, CAN_FRAME_MAX_LENGTH, CAN_ID_MAX, CAN_ID_MIN


@dataclass
class CanFrame:
    """Represents a CAN bus frame with ID, data, and optional timestamp.

    Attributes:
        can_id: CAN identifier (0-0x1FFFFFFF for extended, 0-0x7FF for standard)
        data: Frame data bytes (up to 8 bytes for classic CAN, 64 for CAN FD)
        timestamp: Optional timestamp when frame was received (Unix timestamp)
    """
    can_id: int
    data: bytes
    timestamp: Optional[float] = None

    def __post_init__(self):
        """Validate frame data after initialization."""
        if not isinstance(self.data, bytes):
            raise TypeError(f"data must be bytes, got {type(self.data)}")
        if len(self.data) > CAN_FD_FRAME_MAX_LENGTH:
            raise ValueError(f"CAN data length must be <= {CAN_FD_FRAME_MAX_LENGTH} bytes, got {len(self.data)}")
        if not (CAN_ID_MIN <= self.can_id <= CAN_ID_MAX):
            raise ValueError(f"CAN ID out of range: 0x{self.can_id:X}")

    @property
    def data_hex(self) -> str:
        """Return frame data as hexadecimal string."""
        return self.data.hex()

    @property
    def data_length(self) -> int:
        """Return frame data length."""
        return len(self.data)

    @property
    def is_fd(self) -> bool:
        """True when the payload is longer than a classic CAN frame allows."""
        return len(self.data) > CAN_FRAME_MAX_LENGTH
