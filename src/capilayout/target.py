"""Target platform descriptor and detection from ``rustc --print cfg``."""

from __future__ import annotations

import os
import re
import subprocess
from dataclasses import dataclass

from capilayout.errors import TargetDetectionError

CFG_PATTERN = re.compile(r'^target_(arch|os|env)="(.*)"$')


@dataclass(frozen=True, slots=True)
class Target:
    os: str
    env: str = ""
    arch: str = ""
    overridden: bool = False

    def triple_hint(self) -> str:
        """Return ``arch-os-env`` for diagnostics; empty parts are kept."""
        return f"{self.arch}-{self.os}-{self.env}"


def parse_cfg(text: str, *, overridden: bool = False) -> Target:
    """Build a :class:`Target` from the output of ``rustc --print cfg``."""
    values: dict[str, str] = {}
    for line in text.splitlines():
        match = CFG_PATTERN.fullmatch(line.strip())
        if match is not None:
            values[match.group(1)] = match.group(2)

    missing = [key for key in ("arch", "os") if key not in values]
    if missing:
        raise TargetDetectionError(
            "rustc cfg output is missing required target keys.",
            hint="Check that the rustc in use supports the requested target.",
            context={"missing": ", ".join(f"target_{key}" for key in missing)},
        )
    # target_env is absent on some targets (e.g. bare metal, macos).
    return Target(
        os=values["os"],
        env=values.get("env", ""),
        arch=values["arch"],
        overridden=overridden,
    )


def detect_target(triple: str | None = None, *, rustc: str | None = None) -> Target:
    """Query rustc for the cfg of ``triple`` (or the host when ``None``)."""
    tool = rustc or os.environ.get("RUSTC", "rustc")
    command = [tool, "--print", "cfg"]
    if triple is not None:
        command.extend(["--target", triple])
    try:
        completed = subprocess.run(
            command,
            check=False,
            text=True,
            capture_output=True,
        )
    except FileNotFoundError as exc:
        raise TargetDetectionError(
            "rustc executable was not found.",
            hint="Install a Rust toolchain or set the RUSTC environment variable.",
            context={"argv": " ".join(command)},
        ) from exc
    if completed.returncode != 0:
        raise TargetDetectionError(
            "rustc failed to print the target cfg.",
            hint="Inspect the requested target triple and the installed toolchains.",
            context={
                "argv": " ".join(command),
                "stderr": completed.stderr.strip(),
            },
        )
    return parse_cfg(completed.stdout, overridden=triple is not None)


__all__ = ["Target", "detect_target", "parse_cfg"]
