from dataclasses import dataclass
from typing import ClassVar

import pytest

from mosaic.collection.mosaic_array import ArrayConfig
from mosaic.config import Config, ConfigSection


@pytest.fixture
def config_data(tmp_path, monkeypatch):
    """Load a configuration file written in a temporary directory."""
    monkeypatch.setattr(Config, "data", {})

    def load(content):
        path = tmp_path / "mosaic.toml"
        path.write_text(content)
        Config.load_file(str(path))

    return load


def test_config(config_data):
    config_data(
        "[mosaic]\nfoo = 2\n"
        '  [mosaic.log]\n  pretty = false\n  stream_fmt = "%(message)s"'
    )

    @dataclass
    class MyConfig(ConfigSection):
        title: ClassVar[str] = "mosaic.log"
        pretty: bool = True

    config = MyConfig.load()
    assert not config.pretty


def test_array_config(config_data):
    assert not ArrayConfig.load().copy_on_read

    config_data("[array]\ncopy_on_read = true\n")
    assert ArrayConfig.load().copy_on_read


def test_config_wrong_type(config_data, caplog):
    config_data('[array]\ncopy_on_read = "yes"\n')

    # invalid values are reported and the default value is kept
    assert not ArrayConfig.load().copy_on_read
    assert "array.copy_on_read" in caplog.text


def test_config_invalid_toml(config_data, caplog):
    config_data("[array\n")
    assert Config.data == {}
    assert caplog.records


def test_config_section_not_a_table(config_data, caplog):
    config_data("array = true\n")

    assert Config.load_section("array") == {}
    assert not ArrayConfig.load().copy_on_read
    assert "array: array is not a table" in caplog.text

    config_data("mosaic = 2\n")
    assert Config.load_section("mosaic.log") == {}
