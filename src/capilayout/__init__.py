"""Public package entrypoint for C-API artifact layout resolution."""

from .build_targets import BuildTargets, ExtraTargets
from .config import (
    CApiConfig,
    HeaderConfig,
    InstallConfig,
    LibraryConfig,
    LibraryTypes,
    PkgConfigConfig,
    load_capi_config,
)
from .errors import (
    CapiError,
    ConfigError,
    ErrorCode,
    InstallTargetError,
    TargetDetectionError,
    UnsupportedTargetError,
)
from .install import LibType
from .install_targets import Asset, Generated, InstallTarget, InstallTargetPaths, extra_targets
from .naming import FileNames, file_names
from .observability import StructuredLogger
from .target import Target, detect_target, parse_cfg

__all__ = [
    "Asset",
    "BuildTargets",
    "CApiConfig",
    "CapiError",
    "ConfigError",
    "ErrorCode",
    "ExtraTargets",
    "FileNames",
    "Generated",
    "HeaderConfig",
    "InstallConfig",
    "InstallTarget",
    "InstallTargetError",
    "InstallTargetPaths",
    "LibType",
    "LibraryConfig",
    "LibraryTypes",
    "PkgConfigConfig",
    "StructuredLogger",
    "Target",
    "TargetDetectionError",
    "UnsupportedTargetError",
    "detect_target",
    "extra_targets",
    "file_names",
    "load_capi_config",
    "parse_cfg",
]
