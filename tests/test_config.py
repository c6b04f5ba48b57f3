from pathlib import Path
from textwrap import dedent

import pytest

from capilayout.config import CApiConfig, load_capi_config
from capilayout.errors import ConfigError
from capilayout.install_targets import Asset, Generated, InstallTargetPaths


def test_defaults_derive_from_package_name() -> None:
    config = CApiConfig.from_mapping(None, package_name="ferris-core", package_version="1.2.3")

    assert config.header.name == "ferris_core"
    assert config.header.enabled is True
    assert config.header.generation is True
    assert config.header.subdirectory == ""
    assert config.pkg_config.name == "ferris_core"
    assert config.pkg_config.filename == "ferris_core"
    assert config.pkg_config.version == "1.2.3"
    assert config.library.name == "ferris_core"
    assert config.library.import_library is True
    assert config.install.include == ()
    assert config.install.data == ()


def test_filename_defaults_to_pkg_config_name() -> None:
    config = CApiConfig.from_mapping(
        {"pkg_config": {"name": "libferris"}},
        package_name="ferris",
    )

    assert config.pkg_config.filename == "libferris"


def test_install_declarations_keep_order_and_defaults() -> None:
    config = CApiConfig.from_mapping(
        {
            "header": {"subdirectory": "ferris"},
            "install": {
                "include": {
                    "asset": [{"from": "include/*.h"}],
                    "generated": [{"from": "gen/version.h", "to": "ferris/gen"}],
                },
                "data": {"asset": [{"from": "share/**/*"}]},
            },
        },
        package_name="ferris",
    )

    assert config.install.include == (
        Asset(InstallTargetPaths("include/*.h", "ferris")),
        Generated(InstallTargetPaths("gen/version.h", "ferris/gen")),
    )
    assert config.install.data == (Asset(InstallTargetPaths("share/**/*", "")),)


@pytest.mark.parametrize(
    ("table", "key"),
    [
        ({"header": {"enabled": "yes"}}, "header.enabled"),
        ({"header": {"name": 3}}, "header.name"),
        ({"pkg_config": {"filename": ""}}, "pkg_config.filename"),
        ({"library": {"install_subdir": 1}}, "library.install_subdir"),
        ({"install": {"data": {"asset": [{"to": "x"}]}}}, "install.data.asset[0]"),
        ({"install": {"include": {"generated": ["x.h"]}}}, "install.include.generated[0]"),
        ({"install": {"include": {"asset": {"from": "x.h"}}}}, "install.include.asset"),
        ({"install": []}, "install"),
    ],
)
def test_invalid_tables_raise_config_error(table: dict, key: str) -> None:
    with pytest.raises(ConfigError) as excinfo:
        CApiConfig.from_mapping(table, package_name="ferris")

    assert excinfo.value.context["key"] == key


def test_load_capi_config_reads_cargo_manifest(tmp_path: Path) -> None:
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text(
        dedent(
            """
            [package]
            name = "ferris-ffi"
            version = "0.4.0"
            description = "Ferris as a C library"

            [package.metadata.capi.header]
            name = "ferris"
            generation = false

            [package.metadata.capi.pkg_config]
            filename = "ferris-0.4"

            [[package.metadata.capi.install.data.generated]]
            from = "completions/*"
            to = "ferris"
            """
        ),
        encoding="utf-8",
    )

    config = load_capi_config(manifest)

    assert config.header.name == "ferris"
    assert config.header.generation is False
    assert config.pkg_config.name == "ferris_ffi"
    assert config.pkg_config.filename == "ferris-0.4"
    assert config.pkg_config.description == "Ferris as a C library"
    assert config.library.version == "0.4.0"
    assert config.install.data == (Generated(InstallTargetPaths("completions/*", "ferris")),)


def test_load_capi_config_without_metadata(tmp_path: Path) -> None:
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text('[package]\nname = "ferris"\nversion = "0.1.0"\n', encoding="utf-8")

    config = load_capi_config(manifest)

    assert config.pkg_config.filename == "ferris"


def test_load_capi_config_missing_manifest(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as excinfo:
        load_capi_config(tmp_path / "Cargo.toml")

    assert excinfo.value.hint is not None


def test_load_capi_config_invalid_toml(tmp_path: Path) -> None:
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text("[package\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_capi_config(manifest)


def test_load_capi_config_requires_package_name(tmp_path: Path) -> None:
    manifest = tmp_path / "Cargo.toml"
    manifest.write_text("[workspace]\nmembers = []\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_capi_config(manifest)

    assert excinfo.value.context["key"] == "package.name"
