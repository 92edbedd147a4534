"""
Constants for the DBC signal decoder.

This module centralizes the limits and default values used throughout the
decoder so there is a single source of truth for them:
- CAN ID ranges
- Frame payload lengths (classic CAN and CAN FD)
- Signal width limits
- Default settings
"""

# CAN ID ranges
CAN_ID_MIN = 0
CAN_ID_MAX_STANDARD = 0x7FF  # Standard CAN (11-bit)
CAN_ID_MAX_EXTENDED = 0x1FFFFFFF  # Extended CAN (29-bit)
CAN_ID_MAX = CAN_ID_MAX_EXTENDED

# Frame payload limits (bytes)
CAN_FRAME_MAX_LENGTH = 8  # Classic CAN
CAN_FD_FRAME_MAX_LENGTH = 64  # CAN FD
CAN_FD_LENGTHS = (0, 1, 2, 3, 4, 5, 6, 7, 8, 12, 16, 20, 24, 32, 48, 64)

# Signal width limits (bits)
SIGNAL_BIT_LENGTH_MIN = 1
SIGNAL_BIT_LENGTH_MAX = 64

# Widths that map directly onto a native signed integer type
NATIVE_SIGNED_WIDTHS = (8, 16, 32, 64)

# Value returned for 1-bit signals under the legacy constant policy
SINGLE_BIT_CONSTANT_VALUE = 1.0

# Default decoder settings
SINGLE_BIT_POLICY_DEFAULT = 'literal'
PAD_SHORT_PAYLOADS_DEFAULT = False

# Logging
LOG_LEVEL_DEFAULT = 'INFO'
LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s] %(message)s'

SERVICE_NAME = 'dbc-signal-decoder'
SERVICE_VERSION = '0.1.0'
