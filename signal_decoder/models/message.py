"""
CAN message model grouping the signals of one frame identifier.
"""
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from signal_decoder.constants import CAN_FRAME_MAX_LENGTH
from signal_decoder.models.signal_descriptor import SignalDescriptor


@dataclass(frozen=True)
class Message:
    """A message definition from the DBC.

    Attributes:
        frame_id: CAN identifier of the message
        name: Message name
        length: Declared payload length in bytes
        signals: Signal descriptors in DBC order
        is_extended_frame: True for 29-bit identifiers
        is_fd: True for CAN FD messages
    """
    frame_id: int
    name: str
    length: int
    signals: Tuple[SignalDescriptor, ...] = ()
    is_extended_frame: bool = False
    is_fd: bool = False

    @property
    def signal_names(self) -> Tuple[str, ...]:
        return tuple(sig.name for sig in self.signals)

    def get_signal(self, name: str) -> Optional[SignalDescriptor]:
        """Return the signal called ``name`` or None."""
        for sig in self.signals:
            if sig.name == name:
                return sig
        return None

    @classmethod
    def from_cantools(cls, message: Any, signals: Tuple[SignalDescriptor, ...]) -> 'Message':
        """Build a message from a ``cantools.database.can.Message`` and converted signals."""
        length = int(getattr(message, 'length', CAN_FRAME_MAX_LENGTH))
        return cls(
            frame_id=int(message.frame_id),
            name=message.name,
            length=length,
            signals=tuple(signals),
            is_extended_frame=bool(getattr(message, 'is_extended_frame', False)),
            is_fd=bool(getattr(message, 'is_fd', False)) or length > CAN_FRAME_MAX_LENGTH,
        )
