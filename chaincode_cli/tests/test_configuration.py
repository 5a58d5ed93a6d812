"""Tests for merging default scripts and configuration."""

import pytest

from ..configuration import (
    ChaincodeConfig,
    add_configuration,
    add_scripts,
    default_configuration,
    load_chaincode_config,
)
from ..errors import CorruptManifest

SCRIPTS = {"test": "jest", "lint": "eslint ."}

DEFAULTS = {
    "chaincodes": [],
    "sourcePath": "./src",
    "buildPath": "./build",
    "testPath": "./test",
}


def test_default_configuration() -> None:
    assert default_configuration() == DEFAULTS


def test_configuration_created_when_missing() -> None:
    manifest = {"name": "project"}
    add_configuration(manifest, "config")
    assert manifest["config"] == DEFAULTS


def test_configuration_fills_only_missing_fields() -> None:
    manifest = {
        "config": {
            "chaincodes": ["fabcar"],
            "sourcePath": "./chaincode-src",
            "testPath": "./spec",
            "port": 7052,
        }
    }
    add_configuration(manifest, "config")
    assert manifest["config"] == {
        "chaincodes": ["fabcar"],
        "sourcePath": "./chaincode-src",
        "testPath": "./spec",
        "port": 7052,
        "buildPath": "./build",
    }


def test_configuration_default_list_is_not_shared() -> None:
    first: dict = {}
    second: dict = {}
    add_configuration(first, "config")
    add_configuration(second, "config")
    first["config"]["chaincodes"].append("fabcar")
    assert second["config"]["chaincodes"] == []


def test_configuration_null_section() -> None:
    manifest = {"config": None}
    add_configuration(manifest, "config")
    assert manifest["config"] == DEFAULTS


@pytest.mark.parametrize("value", ["./src", ["./src"], 3])
def test_configuration_of_wrong_type(value: object) -> None:
    with pytest.raises(CorruptManifest):
        add_configuration({"config": value}, "config")


def test_configuration_field_of_wrong_type() -> None:
    with pytest.raises(CorruptManifest):
        add_configuration({"config": {"sourcePath": 3}}, "config")


def test_scripts_fill_only_missing() -> None:
    manifest = {"scripts": {"test": "mocha", "start": "node index.js"}}
    add_scripts(manifest, SCRIPTS)
    assert manifest["scripts"] == {
        "test": "mocha",
        "start": "node index.js",
        "lint": "eslint .",
    }


def test_scripts_null_test_is_replaced() -> None:
    manifest = {"scripts": {"test": None}}
    add_scripts(manifest, SCRIPTS)
    assert manifest["scripts"]["test"] == "jest"


def test_scripts_created_when_missing() -> None:
    manifest: dict = {}
    add_scripts(manifest, SCRIPTS)
    assert manifest["scripts"] == SCRIPTS


def test_scripts_of_wrong_type() -> None:
    with pytest.raises(CorruptManifest):
        add_scripts({"scripts": "jest"}, SCRIPTS)


def test_load_chaincode_config() -> None:
    config = load_chaincode_config({"config": dict(DEFAULTS, chaincodes=["a"])}, "config")
    assert isinstance(config, ChaincodeConfig)
    assert config.chaincodes == ["a"]
    assert config.source_path == "./src"
    assert config.test_path == "./test"
    assert config.build_path == "./build"


def test_load_chaincode_config_missing() -> None:
    with pytest.raises(CorruptManifest):
        load_chaincode_config({}, "config")
