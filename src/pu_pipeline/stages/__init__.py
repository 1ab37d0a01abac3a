# src/pu_pipeline/stages/__init__.py

from .transform import CodeTransform
from .manifest import ManifestCheck
from .install import DependencyInstall
from .provision import StackUp

__all__ = [
    "CodeTransform",
    "ManifestCheck",
    "DependencyInstall",
    "StackUp",
]
