from pathlib import Path

import pytest
import tomli_w

from config import DEFAULT_LINK_LABEL_SEPARATOR, get_config_path, load_config


@pytest.fixture
def fake_home(tmp_path, monkeypatch):
    monkeypatch.setattr(Path, "home", lambda: tmp_path)
    return tmp_path


class TestLoadConfig:
    """Tests for load_config."""

    def test_creates_default_config(self, fake_home):
        """Test that a missing config file is written with defaults."""
        config = load_config()

        assert get_config_path().exists()
        assert config.store_path == fake_home / "data" / "tagtree" / "store" / "categories.json"
        assert config.log_level == "INFO"
        assert config.link_label_separator == DEFAULT_LINK_LABEL_SEPARATOR
        assert config.enable_reset is False

    def test_default_config_round_trips(self, fake_home):
        """Test that the written default file loads back to the same values."""
        written = load_config()

        assert load_config() == written

    def test_partial_config_uses_defaults(self, fake_home):
        """Test that missing sections fall back to defaults under base_dir."""
        config_path = get_config_path()
        config_path.parent.mkdir(parents=True)
        with open(config_path, "wb") as f:
            tomli_w.dump(
                {
                    "base_dir": str(fake_home / "elsewhere"),
                    "logging": {"level": "DEBUG"},
                    "links": {"label_separator": " - "},
                },
                f,
            )

        config = load_config()

        assert config.base_dir == fake_home / "elsewhere"
        assert config.store_data_dir == fake_home / "elsewhere" / "store"
        assert config.log_level == "DEBUG"
        assert config.archive_enabled is True
        assert config.link_label_separator == " - "
