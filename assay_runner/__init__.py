# assay_runner/__init__.py
from assay_runner.decorator import assay

__all__ = ["assay"]
