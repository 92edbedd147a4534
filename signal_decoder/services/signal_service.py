"""
Signal Service for decoding whole CAN frames and caching the latest values.

This service ties the message database and the frame decoder together:
look up the message by ID, decode each of its signals from the payload, and
remember the most recent value of every signal for later retrieval.
"""
import time
import logging
import threading
from typing import Optional, Tuple, Dict, List

from signal_decoder.exceptions import SignalBoundsError, SignalDecodeError
from signal_decoder.models.can_frame import CanFrame
from signal_decoder.models.message import Message
from signal_decoder.models.signal_value import SignalValue
from signal_decoder.services.dbc_service import DbcService
from signal_decoder.services.frame_decoder import FrameDecoder
from signal_decoder.utils.bits import BytesLike

logger = logging.getLogger(__name__)


class SignalService:
    """Service for decoding CAN frames and managing the signal value cache.

    This service provides:
    - Decoding frames into signal values using the loaded DBC
    - Caching latest signal values for quick lookup
    - Retrieving latest signal values by message ID and signal name

    Attributes:
        dbc_service: DbcService used for message lookup
        decoder: FrameDecoder used for each signal
        pad_short_payloads: Zero-pad payloads shorter than the message's declared length
        _signal_values: Cache of latest signal values
                        Key: "message_id:signal_name" -> (timestamp, value)
    """

    def __init__(self, dbc_service: DbcService, decoder: Optional[FrameDecoder] = None,
                 pad_short_payloads: bool = False):
        """Initialize the signal service.

        Args:
            dbc_service: DbcService instance for message lookup
            decoder: FrameDecoder to use (default: literal 1-bit decoder)
            pad_short_payloads: Whether to zero-pad short payloads before decoding
        """
        self.dbc_service = dbc_service
        self.decoder = decoder or FrameDecoder()
        self.pad_short_payloads = pad_short_payloads
        self._signal_values: Dict[str, Tuple[float, float]] = {}
        self._cache_lock = threading.Lock()

    def _prepare_payload(self, message: Message, data: BytesLike) -> BytesLike:
        if self.pad_short_payloads and len(data) < message.length:
            logger.debug(
                f"Padding payload for 0x{message.frame_id:X} from {len(data)} to {message.length} bytes"
            )
            return bytes(data) + b'\x00' * (message.length - len(data))
        return data

    def _decode_signals(self, message: Message, data: BytesLike) -> List[Tuple[str, int, float, str]]:
        payload = self._prepare_payload(message, data)
        decoded = []
        for sig in message.signals:
            try:
                raw = self.decoder.decode_raw(payload, sig)
                value = self.decoder.to_physical(raw, sig)
            except SignalBoundsError as e:
                logger.warning(f"Failed to decode {message.name}.{sig.name} from 0x{message.frame_id:X}: {e}")
                raise SignalDecodeError(
                    f"Failed to decode signal {sig.name} of message 0x{message.frame_id:X}: {e}",
                    can_id=message.frame_id, signal_name=sig.name, data=bytes(data), original_error=e)
            decoded.append((sig.name, raw, value, sig.unit))
        return decoded

    def decode_message(self, can_id: int, data: BytesLike) -> Dict[str, float]:
        """Decode every signal of the message with ID ``can_id``.

        Args:
            can_id: CAN message ID
            data: Frame payload bytes

        Returns:
            Dictionary mapping signal names to physical values

        Raises:
            SignalDecodeError: If the ID is unknown or a signal does not fit the payload
        """
        message = self.dbc_service.find_message_by_id(can_id)
        if message is None:
            raise SignalDecodeError(f"No message defined for CAN ID 0x{can_id:X}",
                                    can_id=can_id, data=bytes(data))
        return {name: value for name, _raw, value, _unit in self._decode_signals(message, data)}

    def decode_frame(self, frame: CanFrame) -> List[SignalValue]:
        """Decode a CAN frame into signal values and update the cache.

        Args:
            frame: CAN frame with can_id, data, and optional timestamp

        Returns:
            List of SignalValue objects (empty if no DBC loaded or the ID is unknown)

        Raises:
            SignalDecodeError: If a signal does not fit the payload
        """
        if not self.dbc_service.is_loaded():
            logger.debug("SignalService.decode_frame: DBC not loaded in service")
            return []

        message = self.dbc_service.find_message_by_id(frame.can_id)
        if message is None:
            logger.debug(f"SignalService.decode_frame: No message found for CAN ID 0x{frame.can_id:X}")
            return []

        timestamp = frame.timestamp if frame.timestamp is not None else time.time()
        signal_values = []
        for name, raw, value, unit in self._decode_signals(message, frame.data):
            signal_values.append(SignalValue(
                signal_name=name,
                value=value,
                message_id=frame.can_id,
                message_name=message.name,
                unit=unit,
                timestamp=timestamp,
                raw_value=raw,
            ))

        with self._cache_lock:
            for sv in signal_values:
                self._signal_values[sv.key] = (timestamp, sv.value)

        logger.debug(
            f"SignalService.decode_frame: Decoded {len(signal_values)} signals from message "
            f"0x{frame.can_id:X} ({message.name})"
        )
        return signal_values

    def get_latest_signal(self, message_id: Optional[int], signal_name: Optional[str]) -> Tuple[Optional[float], Optional[float]]:
        """Get the latest cached value for a signal.

        Returns:
            Tuple of (timestamp, value) or (None, None) if not found
        """
        if message_id is None or signal_name is None:
            return (None, None)
        return self._signal_values.get(f"{message_id}:{signal_name}", (None, None))

    def get_all_signals_for_message(self, message_id: int) -> Dict[str, Tuple[float, float]]:
        """Get all cached signals for a specific message.

        Returns:
            Dictionary mapping signal_name -> (timestamp, value)
        """
        prefix = f"{message_id}:"
        with self._cache_lock:
            items = list(self._signal_values.items())
        return {key[len(prefix):]: entry for key, entry in items if key.startswith(prefix)}

    def clear_cache(self) -> None:
        """Clear all cached signal values."""
        with self._cache_lock:
            self._signal_values.clear()
        logger.debug("Cleared signal value cache")
