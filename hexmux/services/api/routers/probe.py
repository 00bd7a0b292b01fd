# hexmux/services/api/routers/probe.py
from __future__ import annotations
from fastapi import APIRouter, Depends

from hexmux.common.settings import get_settings
from hexmux.domain.errors import HexmuxError
from hexmux.services.api.deps import get_operation_service
from hexmux.services.api.errors import to_http_error
from hexmux.services.mappers.media import to_capabilities_read, to_descriptor_read
from hexmux.services.operations.service import OperationService
from hexmux.services.schemas.probe import CapabilitiesRead, MediaDescriptorRead, ProbeRequest

cfg = get_settings()
router = APIRouter(prefix=f"{cfg.api.prefix}/probe", tags=["probe"])


@router.get("/capabilities", response_model=CapabilitiesRead)
def get_capabilities(svc: OperationService = Depends(get_operation_service)) -> CapabilitiesRead:
    try:
        return to_capabilities_read(svc.probe_capabilities())
    except HexmuxError as e:
        raise to_http_error(e) from e


@router.post("", response_model=MediaDescriptorRead)
def probe_file(req: ProbeRequest, svc: OperationService = Depends(get_operation_service)) -> MediaDescriptorRead:
    try:
        return to_descriptor_read(svc.probe_file(req.path))
    except HexmuxError as e:
        raise to_http_error(e) from e
