"""Tests for the submission payload and tracking snippet."""

from provisioner.wizard.state import Theme, WizardForm
from provisioner.wizard.submission import build_payload, render_tracking_script


class TestBuildPayload:
    """Tests for build_payload."""

    def test_full_payload(self, project):
        form = WizardForm(
            name="Acme Corp",
            slug="acme-corp",
            domain="https://acme.test/",
            admin_email="admin@acme.test",
            admin_name="Ada",
            theme=Theme(primary_color="#111111"),
        )
        form.secrets["resend_api_key"] = "re_123"

        payload = build_payload(form, project)

        assert payload == {
            "projectId": "proj-42",
            "name": "Acme Corp",
            "slug": "acme-corp",
            "domain": "acme.test",
            "adminEmail": "admin@acme.test",
            "adminName": "Ada",
            "features": form.modules,
            "theme": {"primaryColor": "#111111", "logoUrl": "", "faviconUrl": ""},
            "secrets": {"resend_api_key": "re_123", "square_environment": "sandbox"},
            "plan": "starter",
        }

    def test_optional_fields_omitted(self):
        payload = build_payload(WizardForm(name="Acme", slug="acme", domain="acme.test"))
        assert "projectId" not in payload
        assert "adminEmail" not in payload
        assert "adminName" not in payload

    def test_features_are_a_copy(self):
        form = WizardForm(name="Acme", slug="acme", domain="acme.test")
        payload = build_payload(form)
        payload["features"]["blog"] = True
        assert form.modules["blog"] is False


class TestTrackingScript:
    """Tests for render_tracking_script."""

    def test_render(self):
        script = render_tracking_script("acme", "acme.test", "https://portal.test/")
        assert "orgSlug: 'acme'" in script
        assert "domain: 'acme.test'" in script
        assert '<script src="https://portal.test/tracking.js" defer></script>' in script
