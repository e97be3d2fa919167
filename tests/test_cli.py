"""Tests for CLI commands."""

import pytest
from click.testing import CliRunner
from rich.console import Console

from provisioner import cli as cli_module
from provisioner.api.client import PortalClient
from provisioner.cli import cli

VALID_SEED = """\
name: Acme Corp
domain: https://acme.test/
admin_email: admin@acme.test
modules:
  ecommerce: true
secrets:
  shopify_store_domain: acme.myshopify.com
  shopify_access_token: shpat_123
"""

INVALID_SEED = """\
name: Acme Corp
domain: acme.test
modules:
  analytics: false
  clients: false
  seo: false
theme:
  primary_color: 4bbf39
"""


@pytest.fixture
def runner(tmp_path, monkeypatch) -> CliRunner:
    """CLI runner in an empty directory with a wide console."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli_module, "console", Console(width=200))
    monkeypatch.setenv("PROVISIONER_DEBOUNCE_SECONDS", "0")
    return CliRunner()


@pytest.fixture
def fake_api(monkeypatch, fake_portal):
    """Route every PortalClient the CLI creates to the fake portal."""
    def _client(settings):
        return PortalClient(settings, transport=fake_portal.transport())

    monkeypatch.setattr(cli_module, "PortalClient", _client)
    return fake_portal


def write(path, content):
    path.write_text(content)
    return str(path)


class TestModulesCommand:
    """Tests for 'tenant-provisioner modules'."""

    def test_lists_catalog(self, runner):
        result = runner.invoke(cli, ["modules"])
        assert result.exit_code == 0
        assert "email_manager" in result.output
        assert "Outreach" in result.output
        assert "Always included" in result.output


class TestValidateCommand:
    """Tests for 'tenant-provisioner validate'."""

    def test_valid_seed(self, runner, tmp_path):
        seed = write(tmp_path / "seed.yaml", VALID_SEED)
        result = runner.invoke(cli, ["validate", seed])
        assert result.exit_code == 0, result.output
        assert "Seed is valid" in result.output
        assert "acme-corp" in result.output
        assert "shopify_store_domain, shopify_access_token" in result.output

    def test_invalid_seed(self, runner, tmp_path):
        seed = write(tmp_path / "seed.yaml", INVALID_SEED)
        result = runner.invoke(cli, ["validate", seed])
        assert result.exit_code == 1
        assert "Select at least one module" in result.output
        assert "Invalid color format" in result.output
        assert "Please fix all errors before submitting" in result.output

    def test_bad_seed_file(self, runner, tmp_path):
        seed = write(tmp_path / "seed.yaml", "- not\n- a mapping\n")
        result = runner.invoke(cli, ["validate", seed])
        assert result.exit_code == 1

    def test_unknown_module_key(self, runner, tmp_path):
        seed = write(tmp_path / "seed.yaml", "name: Acme Corp\nmodules:\n  crm: true\n")
        result = runner.invoke(cli, ["validate", seed])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Unknown module(s): crm" in result.output


class TestCheckSlugCommand:
    """Tests for 'tenant-provisioner check-slug'."""

    def test_available(self, runner, fake_api):
        result = runner.invoke(cli, ["check-slug", "acme"])
        assert result.exit_code == 0
        assert fake_api.slug_checks == ["acme"]

    def test_taken(self, runner, fake_api):
        result = runner.invoke(cli, ["check-slug", "taken-co"])
        assert result.exit_code == 1
        assert "already taken" in result.output

    def test_too_short_is_not_sent(self, runner, fake_api):
        result = runner.invoke(cli, ["check-slug", "A"])
        assert result.exit_code == 2
        assert fake_api.slug_checks == []

    def test_lookup_failure(self, runner, fake_api):
        fake_api.fail_slug_checks = True
        result = runner.invoke(cli, ["check-slug", "acme"])
        assert result.exit_code == 2
        assert "Could not check slug" in result.output


class TestSubmitCommand:
    """Tests for 'tenant-provisioner submit'."""

    def test_success(self, runner, tmp_path, fake_api):
        seed = write(tmp_path / "seed.yaml", VALID_SEED)
        result = runner.invoke(cli, ["submit", seed])
        assert result.exit_code == 0, result.output
        assert "trk-123" in result.output

        payload = fake_api.submissions[0]
        assert payload["slug"] == "acme-corp"
        assert payload["domain"] == "acme.test"
        assert payload["secrets"]["shopify_access_token"] == "shpat_123"

    def test_invalid_seed_sends_nothing(self, runner, tmp_path, fake_api):
        seed = write(tmp_path / "seed.yaml", INVALID_SEED)
        result = runner.invoke(cli, ["submit", seed])
        assert result.exit_code == 1
        assert "Select at least one module" in result.output
        assert fake_api.submissions == []

    def test_taken_slug_sends_nothing(self, runner, tmp_path, fake_api):
        seed = write(tmp_path / "seed.yaml", VALID_SEED.replace("Acme Corp", "Taken Co"))
        result = runner.invoke(cli, ["submit", seed])
        assert result.exit_code == 1
        assert "This slug is already taken" in result.output
        assert fake_api.slug_checks == ["taken-co"]
        assert fake_api.submissions == []

    def test_project_slug_checked_before_submit(self, runner, tmp_path, fake_api):
        seed = write(
            tmp_path / "seed.yaml",
            "project:\n"
            "  id: proj-7\n"
            "  title: Taken Co\n"
            "  tenant_domain: taken.example\n",
        )
        result = runner.invoke(cli, ["submit", seed])
        assert result.exit_code == 1
        assert "This slug is already taken" in result.output
        assert fake_api.submissions == []

    def test_unknown_module_key(self, runner, tmp_path, fake_api):
        seed = write(tmp_path / "seed.yaml", VALID_SEED.replace("  ecommerce: true\n", "  ecommerce: true\n  crm: true\n"))
        result = runner.invoke(cli, ["submit", seed])
        assert result.exit_code == 1
        assert "Unknown module(s): crm" in result.output
        assert fake_api.submissions == []

    def test_endpoint_error(self, runner, tmp_path, fake_api):
        fake_api.provision_status = 403
        fake_api.provision_body = {"error": "Admin access required to create tenants"}
        seed = write(tmp_path / "seed.yaml", VALID_SEED)
        result = runner.invoke(cli, ["submit", seed])
        assert result.exit_code == 1
        assert "Admin access required to create tenants" in result.output


class TestGlobalOptions:
    """Tests for group-level configuration handling."""

    def test_bad_config_file(self, runner, tmp_path):
        config = write(tmp_path / "custom.yaml", "timeout: -5\n")
        result = runner.invoke(cli, ["--config", config, "modules"])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_default_config_file_picked_up(self, runner, tmp_path):
        write(tmp_path / "provisioner.yaml", "log_level: LOUD\n")
        result = runner.invoke(cli, ["modules"])
        assert result.exit_code == 1

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output
