"""Tooling for the Vue component library starter-kit.

The package customizes a library's identity with a substitution routine that
is safe when replacement values contain the text they replace, derives the
published entry points and distribution manifest, and runs a debounced
rebuild loop for development. It is usable programmatically and through the
``libkit`` command line interface.
"""

from __future__ import annotations

from .config import ToolkitConfig
from .customize import CustomizationReport, CustomizationSession
from .errors import EmptySearchTargetError, EntryPointError, LibkitError, ManifestError, ToolError
from .manifest import AttributeSet, PackageManifest
from .substitution import substitute, substitute_many

__all__ = [
    "AttributeSet",
    "CustomizationReport",
    "CustomizationSession",
    "EmptySearchTargetError",
    "EntryPointError",
    "LibkitError",
    "ManifestError",
    "PackageManifest",
    "ToolError",
    "ToolkitConfig",
    "substitute",
    "substitute_many",
]

__version__ = "0.1.0"
