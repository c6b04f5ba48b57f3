"""Platform naming conventions for C-ABI library artifacts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from capilayout.errors import UnsupportedTargetError
from capilayout.target import Target


class OsFamily(StrEnum):
    UNIX = "unix"
    APPLE = "apple"
    WINDOWS = "windows"


OS_FAMILIES: dict[str, OsFamily] = {
    "none": OsFamily.UNIX,
    "linux": OsFamily.UNIX,
    "freebsd": OsFamily.UNIX,
    "dragonfly": OsFamily.UNIX,
    "netbsd": OsFamily.UNIX,
    "android": OsFamily.UNIX,
    "haiku": OsFamily.UNIX,
    "illumos": OsFamily.UNIX,
    "openbsd": OsFamily.UNIX,
    "emscripten": OsFamily.UNIX,
    "hurd": OsFamily.UNIX,
    "macos": OsFamily.APPLE,
    "ios": OsFamily.APPLE,
    "tvos": OsFamily.APPLE,
    "visionos": OsFamily.APPLE,
    "windows": OsFamily.WINDOWS,
}


@dataclass(frozen=True, slots=True)
class FileNames:
    static_lib: Path
    shared_lib: Path
    impl_lib: Path | None = None
    debug_info: Path | None = None
    def_file: Path | None = None


def os_family(target: Target) -> OsFamily:
    family = OS_FAMILIES.get(target.os)
    if family is None:
        raise UnsupportedTargetError(
            f"The target {target.os}-{target.env} is not supported yet",
            hint="Only Unix-like, Apple and Windows operating systems have a naming convention.",
            context={"os": target.os, "env": target.env},
        )
    return family


def file_names(target: Target, lib_name: str, targetdir: Path) -> FileNames:
    """Resolve every artifact file name ``lib_name`` gets on ``target``.

    The lookup is deterministic and touches no files; all paths are joined
    under ``targetdir``.
    """
    family = os_family(target)
    if family is OsFamily.UNIX:
        return FileNames(
            static_lib=targetdir / f"lib{lib_name}.a",
            shared_lib=targetdir / f"lib{lib_name}.so",
        )
    if family is OsFamily.APPLE:
        return FileNames(
            static_lib=targetdir / f"lib{lib_name}.a",
            shared_lib=targetdir / f"lib{lib_name}.dylib",
        )
    if target.env == "msvc":
        return FileNames(
            static_lib=targetdir / f"{lib_name}.lib",
            shared_lib=targetdir / f"{lib_name}.dll",
            impl_lib=targetdir / f"{lib_name}.dll.lib",
            debug_info=targetdir / f"{lib_name}.pdb",
            def_file=targetdir / f"{lib_name}.def",
        )
    # GNU-style toolchains keep the unprefixed dll name rustc emits.
    return FileNames(
        static_lib=targetdir / f"lib{lib_name}.a",
        shared_lib=targetdir / f"{lib_name}.dll",
        impl_lib=targetdir / f"lib{lib_name}.dll.a",
    )


__all__ = ["FileNames", "OS_FAMILIES", "OsFamily", "file_names", "os_family"]
