"""Resolved build artifacts for one C-API library on one target."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from capilayout.config import CApiConfig, LibraryTypes
from capilayout.errors import UnsupportedTargetError
from capilayout.install import LibType
from capilayout.install_targets import InstallPair, extra_targets
from capilayout.naming import file_names
from capilayout.observability import StructuredLogger
from capilayout.target import Target


@dataclass(slots=True)
class ExtraTargets:
    include: list[InstallPair] = field(default_factory=list)
    data: list[InstallPair] = field(default_factory=list)

    def setup(
        self,
        capi_config: CApiConfig,
        root_dir: Path,
        out_dir: Path | None = None,
    ) -> None:
        """Resolve the extra include and data declarations.

        Both lists are replaced only once both resolved, so a failing
        declaration leaves the previous state untouched.
        """
        include = extra_targets(capi_config.install.include, root_dir, out_dir)
        data = extra_targets(capi_config.install.data, root_dir, out_dir)
        self.include = include
        self.data = data


@dataclass(frozen=True, slots=True)
class BuildTargets:
    name: str
    pc: Path
    target: Target
    include: Path | None = None
    static_lib: Path | None = None
    shared_lib: Path | None = None
    impl_lib: Path | None = None
    debug_info: Path | None = None
    def_file: Path | None = None
    # Not an init field, so `dataclasses.replace` copies start with an empty one.
    extra: ExtraTargets = field(default_factory=ExtraTargets, init=False)

    @classmethod
    def new(
        cls,
        name: str,
        target: Target,
        targetdir: Path,
        library_types: LibraryTypes,
        capi_config: CApiConfig,
        *,
        logger: StructuredLogger | None = None,
    ) -> BuildTargets:
        pc = targetdir / f"{capi_config.pkg_config.filename}.pc"
        header = capi_config.header
        include = None
        if header.enabled and header.generation:
            include = (targetdir / header.name).with_suffix(".h")

        # Naming is required even when no library type is requested: the
        # import library, debug info and def file come from the same lookup.
        try:
            names = file_names(target, name, targetdir)
        except UnsupportedTargetError as exc:
            if logger is not None:
                logger.log(
                    operation="resolve_build_targets",
                    target=target.triple_hint(),
                    library=name,
                    message=str(exc),
                    level="error",
                )
            raise

        build_targets = cls(
            name=name,
            pc=pc,
            target=target,
            include=include,
            static_lib=names.static_lib if library_types.staticlib else None,
            shared_lib=names.shared_lib if library_types.cdylib else None,
            impl_lib=names.impl_lib,
            debug_info=names.debug_info,
            def_file=names.def_file,
        )
        if logger is not None:
            logger.log(
                operation="resolve_build_targets",
                target=target.triple_hint(),
                library=name,
                message="Resolved build targets.",
                extra={"lib_type": build_targets.lib_type().value},
            )
        return build_targets

    @classmethod
    def from_config(
        cls,
        target: Target,
        targetdir: Path,
        library_types: LibraryTypes,
        capi_config: CApiConfig,
        *,
        logger: StructuredLogger | None = None,
    ) -> BuildTargets:
        """Resolve targets for the library named in ``[capi.library]``."""
        return cls.new(
            capi_config.library.name,
            target,
            targetdir,
            library_types,
            capi_config,
            logger=logger,
        )

    def lib_type(self) -> LibType:
        return LibType.from_build_targets(self)

    def setup_extra(
        self,
        capi_config: CApiConfig,
        root_dir: Path,
        out_dir: Path | None = None,
        *,
        logger: StructuredLogger | None = None,
    ) -> ExtraTargets:
        self.extra.setup(capi_config, root_dir, out_dir)
        if logger is not None:
            logger.log(
                operation="resolve_extra_targets",
                target=self.target.triple_hint(),
                library=self.name,
                message="Resolved extra install targets.",
                extra={
                    "include": len(self.extra.include),
                    "data": len(self.extra.data),
                    "generated_skipped": out_dir is None,
                },
            )
        return self.extra

    def debug_info_file_name(self, bindir: Path, libdir: Path) -> Path | None:
        """Return where the debug info file installs, if the target has one."""
        if self.debug_info is None:
            return None
        # TODO: model split-debuginfo (packed .dwp / .dSYM) names for ELF and
        # Mach-O targets so SO and DYLIB get a debug_info path too.
        if self.lib_type() is LibType.WINDOWS:
            return bindir / self.debug_info.name
        return libdir / self.debug_info.name

    def artifacts(self) -> dict[str, Path]:
        """Return the present artifact paths keyed by slot name."""
        slots = {
            "include": self.include,
            "static_lib": self.static_lib,
            "shared_lib": self.shared_lib,
            "impl_lib": self.impl_lib,
            "debug_info": self.debug_info,
            "def_file": self.def_file,
            "pc": self.pc,
        }
        return {slot: path for slot, path in slots.items() if path is not None}


__all__ = ["BuildTargets", "ExtraTargets"]
