"""Pytest config putting the repository root on sys.path and sharing DBC fixtures."""
import os
import sys

import pytest

repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

# Speed: little-endian, bytes 0-1
# Temp:  big-endian signed, byte 2 plus upper nibble of byte 3
# Flag:  1 bit, byte 4 bit 0
# Wide:  CAN FD message, bits 480-495
VEHICLE_DBC = """VERSION ""

NS_ :

BS_:

BU_: ECU

BO_ 256 Status: 8 ECU
 SG_ Speed : 0|16@1+ (0.01,0) [0|655.35] "km/h" ECU
 SG_ Temp : 23|12@0- (0.5,-10) [-1034|1033.5] "degC" ECU
 SG_ Flag : 32|1@1+ (1,0) [0|1] "" ECU

BO_ 2566848513 ExtStatus: 8 ECU
 SG_ Counter : 0|8@1+ (1,0) [0|255] "" ECU

BO_ 512 FdFrame: 64 ECU
 SG_ Wide : 480|16@1+ (1,0) [0|65535] "" ECU
"""

STATUS_PAYLOAD = bytes([0x10, 0x27, 0xFF, 0xE0, 0x01, 0x00, 0x00, 0x00])


@pytest.fixture
def vehicle_dbc_bytes():
    return VEHICLE_DBC.encode('utf-8')


@pytest.fixture
def vehicle_dbc_file(tmp_path):
    path = tmp_path / 'vehicle.dbc'
    path.write_text(VEHICLE_DBC, encoding='utf-8')
    return str(path)


@pytest.fixture
def vehicle_dbc_text():
    return VEHICLE_DBC


@pytest.fixture
def status_payload():
    return STATUS_PAYLOAD
