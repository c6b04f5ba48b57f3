import json
from pathlib import Path

import pytest

from capilayout.build_targets import BuildTargets
from capilayout.config import CApiConfig, LibraryTypes
from capilayout.errors import (
    ConfigError,
    ErrorCode,
    InstallTargetError,
    TargetDetectionError,
    UnsupportedTargetError,
)
from capilayout.install import LibType
from capilayout.observability import StructuredLogger
from capilayout.target import Target


def test_error_codes_are_stable_and_machine_readable() -> None:
    errors = [
        UnsupportedTargetError("no naming"),
        InstallTargetError("bad pattern"),
        ConfigError("bad config"),
        TargetDetectionError("no rustc"),
    ]
    assert [error.code for error in errors] == [
        ErrorCode.UNSUPPORTED_TARGET.value,
        ErrorCode.INSTALL_TARGET.value,
        ErrorCode.CONFIG.value,
        ErrorCode.TARGET_DETECTION.value,
    ]


def test_error_str_includes_hint_and_context() -> None:
    error = UnsupportedTargetError(
        "The target plan9- is not supported yet",
        hint="Pick another target.",
        context={"os": "plan9", "env": ""},
    )

    rendered = str(error)
    assert "Hint: Pick another target." in rendered
    assert "  os: plan9" in rendered
    # Empty context values are omitted from the rendered message.
    assert "env:" not in rendered
    assert error.to_dict()["context"] == {"os": "plan9", "env": ""}
    assert error.to_dict()["hint"] == "Pick another target."


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        (Target(os="linux"), LibType.SO),
        (Target(os="android"), LibType.SO),
        (Target(os="macos"), LibType.DYLIB),
        (Target(os="visionos"), LibType.DYLIB),
        (Target(os="windows", env="msvc"), LibType.WINDOWS),
        (Target(os="windows", env="gnu"), LibType.WINDOWS),
    ],
)
def test_lib_type_classification(
    capi_config: CApiConfig,
    target: Target,
    expected: LibType,
) -> None:
    bt = BuildTargets.new("ferris", target, Path("out"), LibraryTypes(), capi_config)

    assert LibType.from_build_targets(bt) is expected
    assert LibType.from_target(target) is expected


def test_lib_type_from_unsupported_target_raises() -> None:
    with pytest.raises(UnsupportedTargetError):
        LibType.from_target(Target(os="solaris"))


def test_structured_logger_writes_json_lines(tmp_path: Path) -> None:
    logger = StructuredLogger()
    logger.log(operation="resolve_build_targets", target="x-linux-", library="a", message="ok")
    logger.log(operation="resolve_build_targets", target="x-macos-", library="b", message="ok")

    path = logger.to_json_lines(tmp_path / "logs" / "events.jsonl")

    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["library"] for line in lines] == ["a", "b"]
    assert len(logger.records_for_target("x-macos-")) == 1
