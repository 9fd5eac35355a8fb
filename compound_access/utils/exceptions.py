# =======================================================================================
# compound_access/utils/exceptions.py - Custom Exceptions
# =======================================================================================
class CompoundAccessError(Exception):
    """Base exception for the compound access system."""
    pass

class InvalidCredentialError(CompoundAccessError):
    """Raised when credential text is malformed, incomplete or expired."""
    pass

class ResidentNotFoundError(CompoundAccessError):
    """Raised when a resident is not found."""
    pass

class InactiveResidentError(CompoundAccessError):
    """Raised when an inactive resident presents a credential."""
    pass

class CredentialRenderError(CompoundAccessError):
    """Raised when a credential image cannot be generated."""
    pass

class RecordStoreError(CompoundAccessError):
    """Raised when a stored collection is not a JSON array."""
    pass

class CameraUnavailableError(CompoundAccessError):
    """Raised when the scanner camera cannot be opened or read."""
    pass
