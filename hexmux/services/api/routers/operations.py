# hexmux/services/api/routers/operations.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from hexmux.common.settings import get_settings
from hexmux.domain.errors import HexmuxError
from hexmux.services.api.deps import get_operation_service
from hexmux.services.api.errors import to_http_error
from hexmux.services.mappers.media import to_operation_response
from hexmux.services.operations.service import OperationService
from hexmux.services.schemas.operations import (
    AudioRequest,
    FramesRequest,
    OperationResponse,
    WatermarkRequest,
)

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/operations", tags=["operations"])


@router.post("/frames", response_model=OperationResponse)
def extract_frames(req: FramesRequest, svc: OperationService = Depends(get_operation_service)) -> OperationResponse:
    try:
        rep = svc.extract_frames(req.source, req.folder, **req.frame_options())
    except HexmuxError as e:
        raise to_http_error(e) from e
    return to_operation_response(rep)


@router.post("/audio", response_model=OperationResponse)
def extract_audio(req: AudioRequest, svc: OperationService = Depends(get_operation_service)) -> OperationResponse:
    try:
        rep = svc.extract_audio(req.source, req.destination)
    except HexmuxError as e:
        raise to_http_error(e) from e
    return to_operation_response(rep)


@router.post("/watermark", response_model=OperationResponse)
def watermark(req: WatermarkRequest, svc: OperationService = Depends(get_operation_service)) -> OperationResponse:
    try:
        rep = svc.watermark(req.source, req.watermark, req.output, **req.placement())
    except HexmuxError as e:
        raise to_http_error(e) from e
    return to_operation_response(rep)
