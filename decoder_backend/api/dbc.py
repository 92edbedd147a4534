from fastapi import APIRouter, UploadFile, File, HTTPException, Request
from fastapi.responses import JSONResponse
import logging
from typing import Dict

from decoder_backend import metrics
from decoder_backend.api import dbc_store
from signal_decoder.constants import CAN_FD_FRAME_MAX_LENGTH, CAN_ID_MAX
from signal_decoder.exceptions import DbcError, SignalDecodeError
from signal_decoder.models.can_frame import CanFrame
from signal_decoder.services.dbc_service import DbcService
from signal_decoder.services.frame_decoder import FrameDecoder
from signal_decoder.services.signal_service import SignalService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dbc", tags=["dbc"])


def _dbcs(request: Request) -> Dict[str, DbcService]:
    if not hasattr(request.app.state, "dbcs"):
        request.app.state.dbcs = {}
    return request.app.state.dbcs


def _signal_service(request: Request, dbc_service: DbcService) -> SignalService:
    decoder = getattr(request.app.state, "decoder", None) or FrameDecoder()
    config = getattr(request.app.state, "config", None)
    pad = config.decoder_settings.pad_short_payloads if config is not None else False
    return SignalService(dbc_service, decoder=decoder, pad_short_payloads=pad)


def _parse_can_id(value) -> int:
    try:
        can_id = int(value, 0) if isinstance(value, str) else int(value)
    except (ValueError, TypeError):
        raise HTTPException(status_code=400, detail=f"Invalid CAN ID format: {value}")
    if not (0 <= can_id <= CAN_ID_MAX):
        raise HTTPException(status_code=400, detail=f"Invalid CAN ID: {can_id}. Must be between 0 and 0x1FFFFFFF")
    return can_id


@router.post("/upload")
async def upload_dbc(request: Request, file: UploadFile = File(...)):
    """Upload a DBC file, parse it and persist it to the store."""
    fname = (file.filename or "")
    if not fname.lower().endswith(".dbc"):
        raise HTTPException(status_code=400, detail="Only .dbc files supported")
    contents = await file.read()

    service = DbcService()
    try:
        service.load_dbc_bytes(contents, name=fname)
    except DbcError as e:
        metrics.inc(metrics.DBC_PARSE_ERROR)
        raise HTTPException(status_code=400, detail=f"DBC parse error: {e}")

    message_count = len(service.messages)
    try:
        actual_name = dbc_store.save_dbc(fname, contents, messages=message_count)
    except OSError as e:
        logger.warning(f"Failed to persist DBC {fname}, keeping it in memory only: {e}")
        actual_name = fname
    service.dbc_name = actual_name
    _dbcs(request)[actual_name] = service
    metrics.inc(metrics.DBC_LOADED)
    return JSONResponse({"filename": actual_name, "messages": message_count})


@router.post("/decode-frame")
async def decode_frame(request: Request, payload: dict):
    """Decode a raw CAN frame using an uploaded DBC.

    Payload: { "can_id": int, "data": "hexstring", "dbc": optional filename }
    """
    can_id = payload.get("can_id")
    data_hex = payload.get("data")
    dbc_name = payload.get("dbc")
    if can_id is None or data_hex is None:
        raise HTTPException(status_code=400, detail="can_id and data are required")
    can_id = _parse_can_id(can_id)
    try:
        data = bytes.fromhex(str(data_hex).replace(' ', ''))
    except ValueError:
        raise HTTPException(status_code=400, detail="data must be a hex string")
    if len(data) > CAN_FD_FRAME_MAX_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Data length {len(data)} exceeds maximum CAN FD frame size ({CAN_FD_FRAME_MAX_LENGTH} bytes)"
        )

    dbs = _dbcs(request)
    if not dbs:
        raise HTTPException(status_code=404, detail="No DBC uploaded")
    if dbc_name:
        service = dbs.get(dbc_name)
        if service is None:
            raise HTTPException(status_code=404, detail=f"DBC not found: {dbc_name}")
    else:
        # most recently uploaded DBC (insertion order)
        service = list(dbs.values())[-1]

    message = service.find_message_by_id(can_id)
    if message is None:
        metrics.inc(metrics.DECODE_ERROR)
        raise HTTPException(status_code=400, detail=f"Decode error: no message defined for CAN ID 0x{can_id:X}")

    try:
        values = _signal_service(request, service).decode_frame(CanFrame(can_id=can_id, data=data))
    except SignalDecodeError as e:
        metrics.inc(metrics.DECODE_ERROR)
        raise HTTPException(status_code=400, detail=f"Decode error: {e}")

    metrics.inc(metrics.DECODE_OK)
    return JSONResponse({
        "can_id": can_id,
        "message": message.name,
        "signals": {sv.signal_name: sv.value for sv in values},
        "raw": {sv.signal_name: sv.raw_value for sv in values},
    })


@router.get("/list")
async def list_dbcs(request: Request):
    """List persisted DBCs, falling back to the in-memory ones."""
    files = list(dbc_store.get_index().get("files", {}).values())
    if not files:
        files = [{"filename": name} for name in _dbcs(request).keys()]
    return JSONResponse({"dbcs": files})


@router.get("/{name}/messages")
async def list_messages(request: Request, name: str):
    """Return the messages and signal layouts of a loaded DBC."""
    service = _dbcs(request).get(name)
    if service is None:
        raise HTTPException(status_code=404, detail=f"DBC not found: {name}")
    messages = []
    for msg in sorted(service.get_all_messages(), key=lambda m: m.frame_id):
        messages.append({
            "frame_id": msg.frame_id,
            "name": msg.name,
            "length": msg.length,
            "is_fd": msg.is_fd,
            "signals": [
                {
                    "name": sig.name,
                    "start_bit": sig.start_bit,
                    "bit_length": sig.bit_length,
                    "byte_order": sig.byte_order.value,
                    "value_type": sig.value_type.value,
                    "factor": sig.factor,
                    "offset": sig.offset,
                    "unit": sig.unit,
                }
                for sig in msg.signals
            ],
        })
    return JSONResponse({"dbc": name, "messages": messages})


@router.delete("/{name}")
async def delete_dbc(request: Request, name: str):
    removed = _dbcs(request).pop(name, None) is not None
    deleted = dbc_store.delete_dbc(name)
    if not (removed or deleted):
        raise HTTPException(status_code=404, detail="DBC not found or could not be deleted")
    return JSONResponse({"deleted": name})
