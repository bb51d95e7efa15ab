"""
Tests for ThreadBoard Configuration
"""

from pathlib import Path

from threadboard.config import Config, create_default_config, load_config


class TestLoadConfig:
    """Tests for loading configuration files."""

    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.toml")

        assert config.board.name == "ThreadBoard"
        assert config.board.display_timezone == "America/New_York"
        assert config.web.port == 3000

    def test_load_sections(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[board]\n'
            'name = "Test Board"\n'
            'secret_key = "s3cret"\n'
            'display_timezone = "Europe/Berlin"\n'
            '\n'
            '[database]\n'
            'path = "/tmp/board.db"\n'
            '\n'
            '[web]\n'
            'port = 8080\n'
            'login_attempts_per_minute = 10\n'
        )

        config = load_config(path)

        assert config.board.name == "Test Board"
        assert config.board.secret_key == "s3cret"
        assert config.board.display_timezone == "Europe/Berlin"
        assert config.database.path == "/tmp/board.db"
        assert config.web.port == 8080
        assert config.web.login_attempts_per_minute == 10
        # Untouched sections keep defaults
        assert config.crypto.argon2_time_cost == 3

    def test_default_config_written(self, tmp_path):
        path = tmp_path / "config.toml"
        create_default_config(path)

        assert path.exists()
        config = load_config(path)
        assert config.board.name == Config().board.name
        assert config.web.registration_enabled is True


class TestValidation:
    """Tests for Config.validate."""

    def test_default_secret_rejected(self):
        errors = Config().validate()

        assert any("secret_key" in e for e in errors)

    def test_valid_config(self):
        config = Config()
        config.board.secret_key = "something-random"

        assert config.validate() == []

    def test_unknown_timezone(self):
        config = Config()
        config.board.secret_key = "x"
        config.board.display_timezone = "Mars/Olympus_Mons"

        errors = config.validate()

        assert len(errors) == 1
        assert "display_timezone" in errors[0]

    def test_bad_port_and_level(self):
        config = Config()
        config.board.secret_key = "x"
        config.web.port = 0
        config.logging.level = "LOUD"

        errors = config.validate()

        assert any("web.port" in e for e in errors)
        assert any("logging.level" in e for e in errors)
