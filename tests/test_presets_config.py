import io
import logging

import pytest

from asciimorph.config import (
    SETTINGS_ENV,
    EngineSettings,
    configure_logging,
    default_settings,
    load_settings,
)
from asciimorph.core.errors import ConfigError
from asciimorph.core.frames import AnimationSequence
from asciimorph.core.overlays import RippleConfig
from asciimorph.presets import FORMAT_VERSION, AnimationDocument, AsciiPreset, PresetConfig


# ============================================================
# Engine settings
# ============================================================

class TestEngineSettings:
    def test_from_dict_casts(self):
        s = EngineSettings.from_dict({"particle_count": "40", "fire_cooling": 3})
        assert s.particle_count == 40
        assert s.fire_cooling == 3.0
        assert isinstance(s.fire_cooling, float)
        assert s.trail_length == EngineSettings().trail_length

    def test_unknown_key(self):
        with pytest.raises(ConfigError, match="bogus"):
            EngineSettings.from_dict({"bogus": 1})

    def test_bad_value(self):
        with pytest.raises(ConfigError, match="particle_count"):
            EngineSettings.from_dict({"particle_count": "many"})

    def test_replace_and_to_dict(self):
        s = EngineSettings().replace(wave_band=4)
        assert s.wave_band == 4
        assert EngineSettings.from_dict(s.to_dict()) == s


class TestLoadSettings:
    def test_yaml_file(self, tmp_path, caplog):
        path = tmp_path / "engine.yaml"
        path.write_text("particle_count: 7\nfire_ignition: 0.5\n", encoding="utf-8")
        with caplog.at_level(logging.INFO, logger="asciimorph.config"):
            s = load_settings(path)
        assert s.particle_count == 7
        assert s.fire_ignition == 0.5
        assert "Loaded engine settings" in caplog.text

    def test_missing_or_none_gives_defaults(self, tmp_path):
        assert load_settings(None) == EngineSettings()
        assert load_settings(tmp_path / "absent.yaml") == EngineSettings()

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_settings(path) == EngineSettings()

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n", encoding="utf-8")
        with pytest.raises(ConfigError):
            load_settings(path)

    def test_parse_error(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("particle_count: [1, 2\n", encoding="utf-8")
        with pytest.raises(ConfigError, match="could not parse"):
            load_settings(path)

    def test_env_variable(self, tmp_path, monkeypatch):
        path = tmp_path / "env.yaml"
        path.write_text("trail_length: 4\n", encoding="utf-8")
        monkeypatch.setenv(SETTINGS_ENV, str(path))
        assert default_settings().trail_length == 4

        monkeypatch.delenv(SETTINGS_ENV)
        assert default_settings() == EngineSettings()


def test_configure_logging_is_idempotent():
    root = logging.getLogger("asciimorph")
    before = list(root.handlers)
    level = root.level
    stream = io.StringIO()
    try:
        configure_logging(logging.DEBUG, stream=stream)
        configure_logging(logging.DEBUG, stream=stream)
        added = [h for h in root.handlers if h not in before]
        assert len(added) == 1
        logging.getLogger("asciimorph.test").debug("hello")
        assert "DEBUG" in stream.getvalue()
        assert "asciimorph.test: hello" in stream.getvalue()
    finally:
        for h in root.handlers[:]:
            if h not in before:
                root.removeHandler(h)
        root.setLevel(level)


# ============================================================
# Presets and documents
# ============================================================

class TestAsciiPreset:
    def test_round_trip(self):
        preset = AsciiPreset(
            "logo", "spinning logo", ["a", "b"],
            PresetConfig(speed=90, interactive=False, ripple=RippleConfig(radius=0.2)),
        )
        data = preset.to_dict()
        assert data["config"]["rippleConfig"]["radius"] == 0.2
        assert data["config"]["speed"] == 90
        assert AsciiPreset.from_dict(data) == preset

    def test_defaults(self):
        preset = AsciiPreset.from_dict({"name": "bare"})
        assert preset.frames == []
        assert preset.description == ""
        assert preset.config.interactive
        assert preset.config.speed == 150

    def test_missing_name(self):
        with pytest.raises(ConfigError):
            AsciiPreset.from_dict({"frames": ["a"]})

    def test_bad_config(self):
        with pytest.raises(ConfigError, match="broken"):
            AsciiPreset.from_dict({"name": "broken", "config": {"speed": "fast"}})
        with pytest.raises(ConfigError):
            AsciiPreset.from_dict({"name": "broken", "config": {"rippleConfig": {"radius": "wide"}}})


class TestAnimationDocument:
    def test_round_trip(self):
        doc = AnimationDocument(metadata={"author": "me"})
        doc.add(AnimationSequence.build(["a", "b"], name="first", style="wave"))
        doc.add(AnimationSequence.build(["c"], name="second", style="fire"), key="alt")
        data = doc.to_dict()
        assert data["version"] == FORMAT_VERSION
        assert sorted(data["animations"]) == ["alt", "first"]
        assert data["metadata"] == {"author": "me"}
        assert AnimationDocument.from_dict(data) == doc

    def test_no_metadata_key_when_empty(self):
        assert "metadata" not in AnimationDocument().to_dict()

    @pytest.mark.parametrize("version", [None, "2.0.0", "1.0"])
    def test_version_checked(self, version):
        with pytest.raises(ConfigError, match="version"):
            AnimationDocument.from_dict({"version": version, "animations": {}})

    def test_malformed(self):
        with pytest.raises(ConfigError):
            AnimationDocument.from_dict([])
        with pytest.raises(ConfigError):
            AnimationDocument.from_dict({"version": FORMAT_VERSION, "animations": ["x"]})
        with pytest.raises(ConfigError):
            AnimationDocument.from_dict({"version": FORMAT_VERSION, "animations": {"x": "oops"}})
