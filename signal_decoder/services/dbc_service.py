"""
DBC Service for loading message databases and looking up messages/signals.

This service parses DBC content with the cantools library and converts the
result into this package's own ``Message`` / ``SignalDescriptor`` models, so
the decoder never depends on cantools' in-memory representation.

A loaded database is published as a read-only mapping from frame ID to
``Message``. Reloading builds a complete new mapping first and then swaps the
reference, so concurrent readers always see either the old or the new
database in full.
"""
import os
import logging
import threading
from types import MappingProxyType
from typing import Optional, Dict, List, Mapping, Tuple

import cantools

from signal_decoder.exceptions import DbcError, InvalidSignalError
from signal_decoder.models.message import Message
from signal_decoder.models.signal_descriptor import SignalDescriptor

logger = logging.getLogger(__name__)

_EMPTY: Mapping[int, Message] = MappingProxyType({})


def _decode_text(contents: bytes) -> str:
    try:
        return contents.decode('utf-8')
    except UnicodeDecodeError:
        # Vector tools write DBC files in Windows-1252
        return contents.decode('cp1252', errors='replace')


def _convert_message(message) -> Message:
    signals = []
    for sig in message.signals:
        if getattr(sig, 'is_float', False):
            logger.warning(f"Skipping IEEE float signal {message.name}.{sig.name}: not an integer signal")
            continue
        signals.append(SignalDescriptor.from_cantools(sig))
    return Message.from_cantools(message, tuple(signals))


def load(contents: bytes, name: Optional[str] = None) -> Mapping[int, Message]:
    """Parse DBC content into a read-only mapping of frame ID to Message.

    Args:
        contents: Raw DBC file bytes
        name: Optional name of the source, used in errors and logs

    Returns:
        Read-only mapping from frame ID to Message

    Raises:
        DbcError: If the content cannot be parsed or holds an unusable signal
    """
    if isinstance(contents, str):
        text = contents
    else:
        text = _decode_text(bytes(contents))

    try:
        db = cantools.database.load_string(text, database_format='dbc')
    except Exception as e:
        logger.error(f"Failed to parse DBC {name or '<bytes>'}: {e}")
        raise DbcError(f"Failed to parse DBC: {e}", dbc_path=name, operation='parse', original_error=e)

    messages: Dict[int, Message] = {}
    for msg in db.messages:
        try:
            converted = _convert_message(msg)
        except InvalidSignalError as e:
            raise DbcError(f"Invalid signal in message {msg.name}: {e}", dbc_path=name,
                           operation='convert', original_error=e)
        if converted.frame_id in messages:
            logger.debug(f"Frame ID 0x{converted.frame_id:X} defined twice, keeping {converted.name}")
        messages[converted.frame_id] = converted

    logger.debug(f"Parsed DBC {name or '<bytes>'}: {len(messages)} messages")
    return MappingProxyType(messages)


def load_file(filepath: str) -> Mapping[int, Message]:
    """Read a DBC file from disk and parse it with ``load``.

    Raises:
        DbcError: If the file is missing, unreadable or cannot be parsed
    """
    if not os.path.exists(filepath):
        raise DbcError(f"DBC file not found: {filepath}", dbc_path=filepath, operation='load')
    try:
        with open(filepath, 'rb') as f:
            contents = f.read()
    except OSError as e:
        raise DbcError(f"Failed to read DBC file {filepath}: {e}", dbc_path=filepath,
                       operation='load', original_error=e)
    return load(contents, name=filepath)


class DbcService:
    """Service holding the currently loaded message database.

    This service provides:
    - Loading DBC content from bytes or files
    - Finding messages by CAN ID
    - Finding signals within messages

    Attributes:
        dbc_name: Name or path of the currently loaded DBC (None if none loaded)
    """

    def __init__(self):
        """Initialize the DBC service with an empty database."""
        self.dbc_name: Optional[str] = None
        self._messages: Mapping[int, Message] = _EMPTY
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def messages(self) -> Mapping[int, Message]:
        """Current read-only snapshot of frame ID -> Message."""
        return self._messages

    def _install(self, messages: Mapping[int, Message], name: Optional[str]) -> None:
        with self._lock:
            self._messages = messages
            self.dbc_name = name
            self._loaded = True
        logger.info(f"DBC loaded successfully: {name or '<bytes>'} ({len(messages)} messages)")

    def load_dbc_bytes(self, contents: bytes, name: Optional[str] = None) -> bool:
        """Parse DBC bytes and make them the current database.

        The previous database stays installed if parsing fails.

        Raises:
            DbcError: If the content cannot be parsed
        """
        messages = load(contents, name=name)
        self._install(messages, name)
        return True

    def load_dbc_file(self, filepath: str) -> bool:
        """Load and parse a DBC file, replacing the current database.

        Raises:
            DbcError: If the file is missing or cannot be parsed
        """
        logger.info(f"Loading DBC file: {filepath}")
        messages = load_file(filepath)
        self._install(messages, filepath)
        return True

    def is_loaded(self) -> bool:
        """Check if a DBC is currently loaded."""
        return self._loaded

    def find_message_by_id(self, can_id: int) -> Optional[Message]:
        """Find a message by its CAN ID, or None if unknown."""
        return self._messages.get(int(can_id))

    def find_message_and_signal(self, can_id: int, signal_name: str) -> Tuple[Optional[Message], Optional[SignalDescriptor]]:
        """Find both message and signal by CAN ID and signal name.

        Returns:
            Tuple of (message, signal) or (None, None) if not found
        """
        msg = self.find_message_by_id(can_id)
        if msg is None:
            return (None, None)
        sig = msg.get_signal(signal_name)
        if sig is None:
            return (None, None)
        return (msg, sig)

    def get_all_messages(self) -> List[Message]:
        """Get all messages of the loaded DBC (empty list if none loaded)."""
        return list(self._messages.values())

    def clear(self) -> None:
        """Drop the loaded database."""
        with self._lock:
            self._messages = _EMPTY
            self.dbc_name = None
            self._loaded = False
        logger.debug("Cleared loaded DBC")
