from hexmux.services.schemas.probe import (
    ProbeRequest,
    CapabilitiesRead,
    MediaDescriptorRead,
)
from hexmux.services.schemas.operations import (
    FramesRequest,
    AudioRequest,
    WatermarkRequest,
    OperationResponse,
)
__all__ = [
    "ProbeRequest",
    "CapabilitiesRead",
    "MediaDescriptorRead",
    "FramesRequest",
    "AudioRequest",
    "WatermarkRequest",
    "OperationResponse",
]
