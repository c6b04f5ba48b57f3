"""Artifact manifest export for packaging and install collaborators."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import cbor2

from capilayout.build_targets import BuildTargets
from capilayout.config import CApiConfig

MANIFEST_SCHEMA_VERSION = 1


def to_manifest(
    build_targets: BuildTargets,
    capi_config: CApiConfig | None = None,
) -> dict[str, Any]:
    """Describe the resolved artifacts as a JSON-compatible mapping.

    With ``capi_config`` the pkg-config and library metadata an installer
    needs for the ``.pc`` file and versioned library names is included.
    """
    target = build_targets.target
    manifest: dict[str, Any] = {
        "schema_version": MANIFEST_SCHEMA_VERSION,
        "name": build_targets.name,
        "target": {
            "os": target.os,
            "env": target.env,
            "arch": target.arch,
            "overridden": target.overridden,
        },
        "lib_type": build_targets.lib_type().value,
        "pc": str(build_targets.pc),
        "include": _optional(build_targets.include),
        "static_lib": _optional(build_targets.static_lib),
        "shared_lib": _optional(build_targets.shared_lib),
        "impl_lib": _optional(build_targets.impl_lib),
        "debug_info": _optional(build_targets.debug_info),
        "def_file": _optional(build_targets.def_file),
        "extra": {
            "include": [[str(src), str(dst)] for src, dst in build_targets.extra.include],
            "data": [[str(src), str(dst)] for src, dst in build_targets.extra.data],
        },
    }
    if capi_config is not None:
        pkg_config = capi_config.pkg_config
        library = capi_config.library
        manifest["pkg_config"] = {
            "name": pkg_config.name,
            "filename": pkg_config.filename,
            "description": pkg_config.description,
            "version": pkg_config.version,
        }
        manifest["library"] = {
            "name": library.name,
            "version": library.version,
            "install_subdir": library.install_subdir,
            "import_library": library.import_library,
        }
    return manifest


def to_json(
    build_targets: BuildTargets,
    path: str | Path | None = None,
    *,
    capi_config: CApiConfig | None = None,
) -> str:
    payload = to_manifest(build_targets, capi_config)
    encoded = json.dumps(payload, indent=2, sort_keys=True) + "\n"
    if path is not None:
        Path(path).write_text(encoded, encoding="utf-8")
    return encoded


def to_cbor(
    build_targets: BuildTargets,
    path: str | Path | None = None,
    *,
    capi_config: CApiConfig | None = None,
) -> bytes:
    encoded = cbor2.dumps(to_manifest(build_targets, capi_config), canonical=True)
    if path is not None:
        Path(path).write_bytes(encoded)
    return encoded


def _optional(path: Path | None) -> str | None:
    return str(path) if path is not None else None


__all__ = ["MANIFEST_SCHEMA_VERSION", "to_cbor", "to_json", "to_manifest"]
