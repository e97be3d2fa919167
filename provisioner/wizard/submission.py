"""
Submission Payload

Turns a validated wizard form into the provisioning request body, and
renders the tracking snippet shown on the review step.
"""

from typing import Any, Dict, Optional

from ..config.defaults import DEFAULT_PLAN, DEFAULT_PORTAL_URL
from ..config.models import ProjectRecord
from .state import WizardForm
from .validators import normalize_domain


TRACKING_SCRIPT_TEMPLATE = """<!-- Uptrade Portal Analytics -->
<script>
  window.UPTRADE_CONFIG = {{
    orgSlug: '{slug}',
    domain: '{domain}'
  }};
</script>
<script src="{portal_url}/tracking.js" defer></script>"""


def build_payload(
    form: WizardForm,
    project: Optional[ProjectRecord] = None,
    plan: str = DEFAULT_PLAN,
) -> Dict[str, Any]:
    """
    Build the provisioning request body.

    Module toggles are sent as "features", only non-empty secrets are
    sent, the domain is normalized, and empty admin fields are left out.

    Args:
        form: A form that passed validation
        project: Project being converted, if any
        plan: Billing plan for the new tenant

    Returns:
        JSON-serializable payload
    """
    payload: Dict[str, Any] = {}

    if project is not None:
        payload["projectId"] = project.id

    payload.update({
        "name": form.name,
        "slug": form.slug,
        "domain": normalize_domain(form.domain),
    })

    if form.admin_email:
        payload["adminEmail"] = form.admin_email
    if form.admin_name:
        payload["adminName"] = form.admin_name

    payload.update({
        "features": dict(form.modules),
        "theme": form.theme.to_dict(),
        "secrets": {key: value for key, value in form.secrets.items() if value},
        "plan": plan,
    })
    return payload


def render_tracking_script(slug: str, domain: str, portal_url: str = DEFAULT_PORTAL_URL) -> str:
    """Render the analytics snippet the client adds to their website."""
    return TRACKING_SCRIPT_TEMPLATE.format(
        slug=slug,
        domain=domain,
        portal_url=portal_url.rstrip("/"),
    )
