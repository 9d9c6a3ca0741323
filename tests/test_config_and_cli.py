"""Tests for configuration loading and the command line."""

import json

from alt_text_generator import main as cli
from alt_text_generator.config import AppConfig


class TestAppConfig:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ["OPENAI_API_KEY", "PORT", "MOCK_SEED", "APP_ENV", "MAX_IMAGE_BYTES"]:
            monkeypatch.delenv(name, raising=False)

        config = AppConfig.from_env()

        assert config.port == 3000
        assert config.max_image_bytes == 5 * 1024 * 1024
        assert config.mock_seed is None
        assert config.has_openai is False
        assert config.is_production is False

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("MOCK_SEED", "11")
        monkeypatch.setenv("APP_ENV", "production")
        monkeypatch.setenv("FEEDBACK_FILE", "/tmp/fb.json")

        config = AppConfig.from_env()

        assert config.has_openai is True
        assert config.port == 8080
        assert config.mock_seed == 11
        assert config.is_production is True
        assert config.feedback_file == "/tmp/fb.json"


class TestCli:
    """Tests for the export commands."""

    def test_export(self, monkeypatch, config, store, capsys):
        from alt_text_generator.models import FeedbackInput

        store.append(FeedbackInput(rating=5, generated_alt_text="A cat"))
        monkeypatch.setattr(cli, "get_config", lambda: config)

        assert cli.main(["export"]) == 0

        assert "Generated 1 training examples" in capsys.readouterr().out
        line = open(config.training_export_file, encoding="utf-8").read()
        assert json.loads(line)["messages"][2]["content"] == "A cat"

    def test_export_complete(self, monkeypatch, config, capsys):
        monkeypatch.setattr(cli, "get_config", lambda: config)

        assert cli.main(["export-complete"]) == 0

        assert "5 seed, 0 from feedback" in capsys.readouterr().out

    def test_fine_tune_without_key_fails(self, monkeypatch, config):
        monkeypatch.setattr(cli, "get_config", lambda: config)

        assert cli.main(["fine-tune"]) == 1

    def test_export_corrupt_store_fails(self, monkeypatch, config, store):
        with open(config.feedback_file, "w") as f:
            f.write("corrupt")
        monkeypatch.setattr(cli, "get_config", lambda: config)

        assert cli.main(["export"]) == 1
