"""
Service layer for the DBC signal decoder.

Services:
- FrameDecoder: Bit extraction, sign reconstruction and scaling of one signal
- DbcService: DBC loading and message/signal lookup
- SignalService: Whole-frame decoding and latest-value cache
"""

from signal_decoder.services.dbc_service import DbcService
from signal_decoder.services.frame_decoder import FrameDecoder, SingleBitPolicy
from signal_decoder.services.signal_service import SignalService

__all__ = ['DbcService', 'FrameDecoder', 'SignalService', 'SingleBitPolicy']
