"""Unit tests for the key = value config loader."""

import pytest

from colorsampler.core.config_loader import DEFAULT_CONFIG_PATH, ConfigLoader


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.txt"
    path.write_text(
        "# comment line\n"
        "\n"
        "extract.quality = 25\n"
        "extract.format = PNG # trailing comment\n"
        "reader.native_enabled = off\n"
        "scale = 1.5\n"
        "mask = 0x10\n"
        "not a setting\n"
    )
    return path


class TestConfigLoader:

    def test_untyped_parsing(self, config_file):
        config = ConfigLoader.load(config_file)

        assert config["extract.quality"] == 25
        assert config["extract.format"] == "PNG"
        assert config["reader.native_enabled"] is False
        assert config["scale"] == 1.5
        assert "not a setting" not in config

    def test_typed_parsing_against_defaults(self, config_file):
        config = ConfigLoader.load(config_file, defaults={"mask": 0, "extract.quality": 10, "reader.native_enabled": True})

        assert config["mask"] == 16
        assert config["extract.quality"] == 25
        assert config["reader.native_enabled"] is False

    def test_strict_mode_drops_unknown_keys(self, config_file):
        config = ConfigLoader.load(config_file, defaults={"extract.quality": 10}, strict=True)

        assert config == {"extract.quality": 25}

    def test_missing_file_returns_defaults(self, tmp_path):
        defaults = {"extract.quality": 10}
        config = ConfigLoader.load(tmp_path / "missing.txt", defaults=defaults)

        assert config == defaults
        assert config is not defaults

    def test_bad_typed_value_kept_raw(self, tmp_path):
        path = tmp_path / "config.txt"
        path.write_text("extract.quality = high\n")

        config = ConfigLoader.load(path, defaults={"extract.quality": 10})

        assert config["extract.quality"] == "high"

    def test_bundled_config_exists(self):
        assert DEFAULT_CONFIG_PATH.is_file()
        assert ConfigLoader.load(DEFAULT_CONFIG_PATH)["extract.window_size"] == 50

    @pytest.mark.asyncio
    async def test_load_async(self, config_file):
        config = await ConfigLoader.load_async(config_file)
        assert config["extract.quality"] == 25
