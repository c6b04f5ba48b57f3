"""Extra install declarations and their expansion into (source, destination) pairs.

An install declaration is either an :class:`Asset`, a file that already
exists in the source tree, or a :class:`Generated` file that only shows up
in the build output directory once the build ran. Both wrap the same
:class:`InstallTargetPaths`; they differ only in the root the pattern is
resolved against.
"""

from __future__ import annotations

import glob
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from capilayout.errors import InstallTargetError

RECURSIVE_WILDCARD = "**"

InstallPair = tuple[Path, Path]


@dataclass(frozen=True, slots=True)
class InstallTargetPaths:
    """A glob pattern relative to a root plus the destination it maps to.

    ``to`` is relative to the canonical install directory of the declaration
    kind (include dir for headers, data dir for data files).
    """

    from_pattern: str
    to: str = ""

    def install_paths(self, root: Path) -> list[InstallPair]:
        """Expand the pattern under ``root`` into regular-file pairs.

        Everything below the literal directory prefix of the pattern (the
        sub-tree matched by ``**`` or by a wildcard directory) is kept under
        ``to``; a plain file pattern lands directly in ``to``.
        """
        parts = _validate_pattern(self.from_pattern)
        pattern = PurePosixPath(*parts)
        base = _literal_prefix(parts)

        destination = Path(self.to)
        pairs: list[InstallPair] = []
        # root_dir keeps glob metacharacters in ``root`` itself literal.
        matches = glob.glob(str(pattern), root_dir=root, recursive=True, include_hidden=True)
        for match in sorted(matches):
            relative = PurePosixPath(Path(match).as_posix())
            source = root / relative
            if not source.is_file():
                continue
            try:
                kept = relative.relative_to(base)
            except ValueError as exc:
                raise InstallTargetError(
                    "Install target match lies outside the pattern's base directory.",
                    hint="Check the pattern for components glob normalizes away.",
                    context={"pattern": self.from_pattern, "match": str(relative)},
                ) from exc
            pairs.append((source, destination / kept))
        return pairs


@dataclass(frozen=True, slots=True)
class Asset:
    paths: InstallTargetPaths


@dataclass(frozen=True, slots=True)
class Generated:
    paths: InstallTargetPaths


InstallTarget = Asset | Generated


def extra_targets(
    targets: Iterable[InstallTarget],
    root_path: Path,
    root_output: Path | None = None,
) -> list[InstallPair]:
    """Resolve declarations in order; generated ones need ``root_output``."""
    resolved: list[InstallPair] = []
    for target in targets:
        if isinstance(target, Asset):
            resolved.extend(target.paths.install_paths(root_path))
        elif root_output is not None:
            resolved.extend(target.paths.install_paths(root_output))
    return resolved


def _literal_prefix(parts: tuple[str, ...]) -> PurePosixPath:
    """Return the directories before the first wildcard component.

    The last component is the file name and never part of the prefix.
    """
    prefix: list[str] = []
    for part in parts[:-1]:
        if glob.has_magic(part):
            break
        prefix.append(part)
    return PurePosixPath(*prefix)


def _validate_pattern(pattern: str) -> tuple[str, ...]:
    if not pattern:
        raise InstallTargetError(
            "Install target `from` pattern is empty.",
            hint="Point `from` at a file or glob relative to its root.",
        )
    posix = PurePosixPath(pattern.replace("\\", "/"))
    if posix.is_absolute():
        raise InstallTargetError(
            "Install target `from` pattern must be relative.",
            hint="Patterns are resolved against the source or build output root.",
            context={"pattern": pattern},
        )
    parts = posix.parts
    if ".." in parts:
        raise InstallTargetError(
            "Install target `from` pattern escapes its root.",
            hint="Remove `..` components from the pattern.",
            context={"pattern": pattern},
        )
    for part in parts:
        if RECURSIVE_WILDCARD in part and part != RECURSIVE_WILDCARD:
            raise InstallTargetError(
                "Recursive wildcards must form a whole path component.",
                hint="Use `dir/**/*.h` instead of `dir/**.h`.",
                context={"pattern": pattern, "component": part},
            )
        if _has_unclosed_class(part):
            raise InstallTargetError(
                "Unclosed character class in install target pattern.",
                hint="Close every `[` with a matching `]`.",
                context={"pattern": pattern, "component": part},
            )
    return parts


def _has_unclosed_class(part: str) -> bool:
    # A `]` outside a class is a literal; only an open `[` is malformed.
    start = part.find("[")
    while start != -1:
        end = part.find("]", start + 1)
        if end == -1:
            return True
        start = part.find("[", end + 1)
    return False


__all__ = [
    "Asset",
    "Generated",
    "InstallPair",
    "InstallTarget",
    "InstallTargetPaths",
    "extra_targets",
]
