"""Tests for settings and seed loading."""

import pytest

from provisioner.config import ConfigError, ConfigLoader
from provisioner.config.defaults import DEFAULT_API_URL


class TestConfigLoader:
    """Tests for ConfigLoader."""

    def test_defaults_without_file(self, monkeypatch):
        monkeypatch.delenv("PROVISIONER_API_URL", raising=False)
        settings = ConfigLoader().settings
        assert settings.api_url == DEFAULT_API_URL
        assert settings.timeout == 10.0
        assert settings.debounce_seconds == 0.5

    def test_file_env_and_override_precedence(self, tmp_path, monkeypatch):
        config = tmp_path / "provisioner.yaml"
        config.write_text(
            "api_url: https://file.test/functions/\n"
            "timeout: 5\n"
            "log_level: info\n"
        )
        monkeypatch.setenv("PROVISIONER_TIMEOUT", "7.5")

        settings = ConfigLoader(config).load({"api_url": "https://cli.test/fn", "api_token": None}).settings

        assert settings.api_url == "https://cli.test/fn"
        assert settings.timeout == 7.5
        assert settings.log_level == "INFO"
        assert settings.api_token is None

    def test_trailing_slash_stripped(self, tmp_path):
        config = tmp_path / "provisioner.yaml"
        config.write_text("api_url: https://file.test/functions/\n")
        assert ConfigLoader(config).settings.api_url == "https://file.test/functions"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError):
            ConfigLoader(tmp_path / "nope.yaml").load()

    @pytest.mark.parametrize("content", [
        "api_url: ftp://bad\n",
        "timeout: -1\n",
        "log_level: LOUD\n",
        "- just\n- a list\n",
        "api_url: [unclosed\n",
    ])
    def test_invalid_settings(self, tmp_path, content):
        config = tmp_path / "provisioner.yaml"
        config.write_text(content)
        with pytest.raises(ConfigError):
            ConfigLoader(config).load()

    def test_load_seed(self, tmp_path):
        seed_file = tmp_path / "seed.yaml"
        seed_file.write_text(
            "name: Acme Corp\n"
            "domain: acme.test\n"
            "modules:\n"
            "  ecommerce: true\n"
            "theme:\n"
            "  primary_color: '#111111'\n"
            "secrets:\n"
            "  shopify_store_domain: acme.myshopify.com\n"
        )
        seed = ConfigLoader().load_seed(seed_file)
        assert seed.name == "Acme Corp"
        assert seed.slug is None
        assert seed.modules == {"ecommerce": True}
        assert seed.theme.primary_color == "#111111"

    def test_seed_rejects_unknown_module(self, tmp_path):
        seed_file = tmp_path / "seed.yaml"
        seed_file.write_text("name: Acme\nmodules:\n  crm: true\n  billing: true\n")
        with pytest.raises(ConfigError, match=r"Unknown module\(s\): billing, crm"):
            ConfigLoader().load_seed(seed_file)

    def test_load_project(self, tmp_path):
        project_file = tmp_path / "project.yaml"
        project_file.write_text(
            "id: proj-1\n"
            "title: Bakery\n"
            "contact:\n"
            "  email: ada@bakery.example\n"
        )
        project = ConfigLoader().load_project(project_file)
        assert project.id == "proj-1"
        assert project.contact.email == "ada@bakery.example"

    def test_project_requires_id(self, tmp_path):
        project_file = tmp_path / "project.yaml"
        project_file.write_text("title: Bakery\n")
        with pytest.raises(ConfigError):
            ConfigLoader().load_project(project_file)
