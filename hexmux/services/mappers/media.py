# hexmux/services/mappers/media.py
from __future__ import annotations

from hexmux.domain.dataclasses.reports import OperationReport
from hexmux.domain.entities.capabilities import CapabilitySet
from hexmux.domain.entities.media import MediaDescriptor
from hexmux.services.schemas.operations import OperationResponse
from hexmux.services.schemas.probe import CapabilitiesRead, MediaDescriptorRead


def to_capabilities_read(caps: CapabilitySet) -> CapabilitiesRead:
    # sets are unordered; sort for stable responses
    return CapabilitiesRead(
        modules=sorted(caps.modules),
        decode=sorted(caps.decode),
        encode=sorted(caps.encode),
    )


def to_descriptor_read(desc: MediaDescriptor) -> MediaDescriptorRead:
    return MediaDescriptorRead.model_validate(desc.as_dict())


def to_operation_response(report: OperationReport) -> OperationResponse:
    return OperationResponse(
        operation=report.operation,
        started_at=report.started_at,
        finished_at=report.finished_at,
        source=report.source,
        output=report.output,
        files=list(report.files),
        command=list(report.command),
    )
