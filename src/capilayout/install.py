"""Install-time classification of resolved library artifacts."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from capilayout.naming import OsFamily, os_family
from capilayout.target import Target

if TYPE_CHECKING:
    from capilayout.build_targets import BuildTargets


class LibType(StrEnum):
    SO = "so"
    DYLIB = "dylib"
    WINDOWS = "windows"

    @classmethod
    def from_build_targets(cls, build_targets: BuildTargets) -> LibType:
        # Import libraries and module definitions only exist on Windows.
        if build_targets.impl_lib is not None or build_targets.def_file is not None:
            return cls.WINDOWS
        if os_family(build_targets.target) is OsFamily.APPLE:
            return cls.DYLIB
        return cls.SO

    @classmethod
    def from_target(cls, target: Target) -> LibType:
        family = os_family(target)
        if family is OsFamily.WINDOWS:
            return cls.WINDOWS
        if family is OsFamily.APPLE:
            return cls.DYLIB
        return cls.SO


__all__ = ["LibType"]
