# assay/di.py
from assay.config import Settings
from assay.services.private_fs import PrivateFS


def build_private_fs(settings: Settings | None = None, root_directory=None) -> PrivateFS:
    """
    Rooted when a root directory is given (argument first, then settings),
    temporary otherwise.
    """
    s = settings or Settings()
    root = root_directory or s.ASSAY_ROOT_DIRECTORY
    if root:
        return PrivateFS.rooted(root, warn_on_overwrite=s.ASSAY_WARN_ON_OVERWRITE)
    return PrivateFS.temporary(s.ASSAY_TEMP_PREFIX, warn_on_overwrite=s.ASSAY_WARN_ON_OVERWRITE)
