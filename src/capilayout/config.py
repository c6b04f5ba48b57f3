"""Typed ``[package.metadata.capi]`` configuration and manifest loader."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from capilayout.errors import ConfigError
from capilayout.install_targets import Asset, Generated, InstallTarget, InstallTargetPaths


@dataclass(frozen=True, slots=True)
class LibraryTypes:
    staticlib: bool = True
    cdylib: bool = True


@dataclass(frozen=True, slots=True)
class HeaderConfig:
    name: str
    subdirectory: str = ""
    generation: bool = True
    enabled: bool = True


@dataclass(frozen=True, slots=True)
class PkgConfigConfig:
    name: str
    filename: str
    description: str = ""
    version: str = ""


@dataclass(frozen=True, slots=True)
class LibraryConfig:
    name: str
    version: str = ""
    install_subdir: str | None = None
    import_library: bool = True


@dataclass(frozen=True, slots=True)
class InstallConfig:
    include: tuple[InstallTarget, ...] = ()
    data: tuple[InstallTarget, ...] = ()


@dataclass(frozen=True, slots=True)
class CApiConfig:
    header: HeaderConfig
    pkg_config: PkgConfigConfig
    library: LibraryConfig
    install: InstallConfig = field(default_factory=InstallConfig)

    @classmethod
    def from_mapping(
        cls,
        table: Mapping[str, Any] | None,
        *,
        package_name: str,
        package_version: str = "",
        package_description: str = "",
    ) -> CApiConfig:
        """Build a config from a parsed ``[package.metadata.capi]`` table.

        Missing keys fall back to values derived from the package itself.
        """
        capi = _table(table or {}, "capi")
        lib_default = package_name.replace("-", "_")

        header_raw = _table(capi.get("header", {}), "header")
        header = HeaderConfig(
            name=_str(header_raw, "name", lib_default, section="header"),
            subdirectory=_str(header_raw, "subdirectory", "", section="header"),
            generation=_bool(header_raw, "generation", True, section="header"),
            enabled=_bool(header_raw, "enabled", True, section="header"),
        )

        pc_raw = _table(capi.get("pkg_config", {}), "pkg_config")
        pc_name = _str(pc_raw, "name", lib_default, section="pkg_config")
        pkg_config = PkgConfigConfig(
            name=pc_name,
            filename=_str(pc_raw, "filename", pc_name, section="pkg_config"),
            description=_str(pc_raw, "description", package_description, section="pkg_config"),
            version=_str(pc_raw, "version", package_version, section="pkg_config"),
        )
        if not pkg_config.filename:
            raise ConfigError(
                "pkg-config filename must not be empty.",
                hint="Set `filename` in [package.metadata.capi.pkg_config] or drop it.",
                context={"key": "pkg_config.filename"},
            )

        lib_raw = _table(capi.get("library", {}), "library")
        install_subdir = lib_raw.get("install_subdir")
        if install_subdir is not None and not isinstance(install_subdir, str):
            raise _type_error("library", "install_subdir", "string")
        library = LibraryConfig(
            name=_str(lib_raw, "name", lib_default, section="library"),
            version=_str(lib_raw, "version", package_version, section="library"),
            install_subdir=install_subdir,
            import_library=_bool(lib_raw, "import_library", True, section="library"),
        )

        install_raw = _table(capi.get("install", {}), "install")
        install = InstallConfig(
            include=_install_targets(install_raw, "include", default_to=header.subdirectory),
            data=_install_targets(install_raw, "data", default_to=""),
        )
        return cls(header=header, pkg_config=pkg_config, library=library, install=install)


def load_capi_config(manifest_path: str | Path) -> CApiConfig:
    """Read a crate manifest and return its C-API configuration."""
    path = Path(manifest_path)
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigError(
            "Crate manifest does not exist.",
            hint="Pass the path of the crate's Cargo.toml.",
            context={"path": str(path)},
        ) from exc
    try:
        manifest = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(
            "Invalid crate manifest TOML.",
            hint=str(exc),
            context={"path": str(path)},
        ) from exc

    package = _table(manifest.get("package", {}), "package")
    name = package.get("name")
    if not isinstance(name, str) or not name:
        raise ConfigError(
            "Crate manifest has no package name.",
            context={"path": str(path), "key": "package.name"},
        )
    metadata = _table(package.get("metadata", {}), "package.metadata")
    return CApiConfig.from_mapping(
        metadata.get("capi"),
        package_name=name,
        package_version=_str(package, "version", "", section="package"),
        package_description=_str(package, "description", "", section="package"),
    )


def _install_targets(
    install: Mapping[str, Any],
    kind: str,
    *,
    default_to: str,
) -> tuple[InstallTarget, ...]:
    section = _table(install.get(kind, {}), f"install.{kind}")
    targets: list[InstallTarget] = []
    for key, variant in (("asset", Asset), ("generated", Generated)):
        entries = section.get(key, [])
        if not isinstance(entries, list):
            raise _type_error(f"install.{kind}", key, "array of tables")
        for index, entry in enumerate(entries):
            where = f"install.{kind}.{key}[{index}]"
            if not isinstance(entry, Mapping):
                raise ConfigError(
                    "Install target entries must be tables.",
                    hint='Use `{ from = "pattern", to = "dir" }`.',
                    context={"key": where},
                )
            pattern = entry.get("from")
            if not isinstance(pattern, str):
                raise ConfigError(
                    "A `from` field is required for install targets.",
                    hint='Use `{ from = "pattern", to = "dir" }`.',
                    context={"key": where},
                )
            targets.append(
                variant(
                    InstallTargetPaths(
                        from_pattern=pattern,
                        to=_str(entry, "to", default_to, section=where),
                    )
                )
            )
    return tuple(targets)


def _table(value: Any, section: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigError(
            f"Expected a table for `{section}`.",
            context={"key": section},
        )
    return value


def _str(table: Mapping[str, Any], key: str, default: str, *, section: str) -> str:
    value = table.get(key, default)
    if not isinstance(value, str):
        raise _type_error(section, key, "string")
    return value


def _bool(table: Mapping[str, Any], key: str, default: bool, *, section: str) -> bool:
    value = table.get(key, default)
    if not isinstance(value, bool):
        raise _type_error(section, key, "boolean")
    return value


def _type_error(section: str, key: str, expected: str) -> ConfigError:
    return ConfigError(
        f"Invalid value for `{section}.{key}`.",
        hint=f"Expected a {expected}.",
        context={"key": f"{section}.{key}"},
    )


__all__ = [
    "CApiConfig",
    "HeaderConfig",
    "InstallConfig",
    "LibraryConfig",
    "LibraryTypes",
    "PkgConfigConfig",
    "load_capi_config",
]
