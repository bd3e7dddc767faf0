"""Unit tests for typed sampler configuration."""

from pathlib import Path

import pytest

from colorsampler.sampler.config import (
    DEFAULT_WORK_DIR,
    load_config,
    load_config_file,
)


class TestLoadConfig:

    def test_defaults(self):
        config = load_config({})

        assert config.capture.device == 0
        assert config.capture.work_dir == DEFAULT_WORK_DIR
        assert config.extract.rotation_degrees == 90
        assert config.extract.window_size == 50
        assert config.extract.format == "JPEG"
        assert config.extract.quality == 10
        assert config.extract.resample == "box"
        assert config.reader.native_enabled is True
        assert config.session.auto_save is True
        assert config.logging.level == "INFO"
        assert config.logging.file is None

    def test_values_from_data(self):
        config = load_config({
            "capture.device": "/dev/video2",
            "extract.format": "png",
            "extract.quality": "80",
            "reader.native_enabled": "off",
            "logging.file": "logs/sampler.log",
        })

        assert config.capture.device == "/dev/video2"
        assert config.extract.format == "PNG"
        assert config.extract.quality == 80
        assert config.reader.native_enabled is False
        assert config.logging.file == Path("logs/sampler.log")

    def test_numeric_device_string(self):
        assert load_config({"capture.device": "3"}).capture.device == 3

    def test_overrides_win_and_none_ignored(self):
        config = load_config(
            {"extract.quality": 40, "logging.level": "debug"},
            {"extract.quality": 70, "logging.level": None},
        )
        assert config.extract.quality == 70
        assert config.logging.level == "DEBUG"

    def test_jpg_alias(self):
        assert load_config({"extract.format": "jpg"}).extract.format == "JPEG"

    def test_invalid_values_fall_back(self):
        config = load_config({
            "extract.format": "webp",
            "extract.resample": "sinc",
            "extract.rotation_degrees": 45,
            "extract.window_size": "wide",
        })
        assert config.extract.format == "JPEG"
        assert config.extract.resample == "box"
        assert config.extract.rotation_degrees == 90
        assert config.extract.window_size == 50

    @pytest.mark.parametrize("level", ["verbose", "raiseExceptions", "NOTSET", ""])
    def test_unknown_log_level_falls_back(self, level):
        assert load_config({"logging.level": level}).logging.level == "INFO"

    def test_log_level_uppercased(self):
        assert load_config({"logging.level": "debug"}).logging.level == "DEBUG"

    def test_quality_clamped(self):
        assert load_config({"extract.quality": 500}).extract.quality == 100
        assert load_config({"extract.quality": 0}).extract.quality == 1

    def test_rotation_normalized(self):
        assert load_config({"extract.rotation_degrees": -90}).extract.rotation_degrees == 270
        assert load_config({"extract.rotation_degrees": 0}).extract.rotation_degrees == 0


class TestLoadConfigFile:

    def test_bundled_defaults(self):
        config = load_config_file()
        assert config.extract.window_size == 50
        assert config.extract.rotation_degrees == 90
        assert config.capture.work_dir == DEFAULT_WORK_DIR

    def test_custom_file(self, tmp_path):
        path = tmp_path / "sampler.txt"
        path.write_text(
            "# test config\n"
            "extract.format = PNG  # lossless\n"
            "session.auto_save = false\n"
            f"capture.work_dir = {tmp_path / 'work'}\n"
        )

        config = load_config_file(path)

        assert config.extract.format == "PNG"
        assert config.session.auto_save is False
        assert config.capture.work_dir == tmp_path / "work"

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config_file(tmp_path / "absent.txt")
        assert config.extract.quality == 10
