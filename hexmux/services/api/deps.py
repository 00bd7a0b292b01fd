# hexmux/services/api/deps.py
from __future__ import annotations

from hexmux.services.operations.service import OperationService


def get_operation_service() -> OperationService:
    """
    Provide the OperationService (subprocess engine + local filesystem) via DI.
    Tests override this with fakes.
    """
    return OperationService()
