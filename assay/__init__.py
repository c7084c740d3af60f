# assay/__init__.py
from assay.errors import AssayError, SetupError, StagingError, UsageError
from assay.services.private_fs import PrivateFS

__all__ = ["AssayError", "PrivateFS", "SetupError", "StagingError", "UsageError"]
