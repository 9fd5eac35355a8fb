# =======================================================================================
# compound_access/utils/__init__.py - Utils Package
# =======================================================================================
from .exceptions import *
from .validators import *

__all__ = [
    "CompoundAccessError", "InvalidCredentialError", "ResidentNotFoundError",
    "InactiveResidentError", "CredentialRenderError", "RecordStoreError",
    "CameraUnavailableError", "CredentialValidator", "ensure_aware"
]
