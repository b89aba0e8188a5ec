"""
Intake email transmission via the Resend HTTP API.

One send per blueprint, no retries. Delivery outcome is returned as a
DeliveryResult and never alters the document.
"""

from __future__ import annotations

import json
import logging
from typing import Any, List, Mapping, Optional, Sequence

import httpx

from . import rules
from .config import Settings
from .models import DeliveryResult
from .summary import CONTACT_CENTER, CRM, Accessor, path

logger = logging.getLogger(__name__)

# Email headline lookups. Unlike the summary view, an empty string is a
# value here and only a missing key falls through.
AGENT_WORKSPACE = (path("systems", "agentWorkspace"), path("agentWorkspace"))
TRIGGER_EVENT = (path("trigger", "event"), path("triggerEvent"))
TRIGGER_CHANNEL = (path("trigger", "channel"), path("channel"))
TRIGGER_DIRECTION = (path("trigger", "direction"), path("direction"))


def first_present(document: Mapping[str, Any], accessors: Sequence[Accessor]) -> Any:
    for accessor in accessors:
        value = accessor(document)
        if value is not None:
            return value
    return None


def _line_value(value: Any) -> str:
    if value is None:
        return rules.NOT_AVAILABLE
    return value if isinstance(value, str) else json.dumps(value)


def render_email_text(document: Mapping[str, Any]) -> str:
    """Plain-text email body: headline fields, then the full JSON."""
    lines: List[str] = [
        rules.EMAIL_HEADING,
        "",
        f"CRM: {_line_value(first_present(document, CRM))}",
        f"Contact Center Platform: {_line_value(first_present(document, CONTACT_CENTER))}",
        f"Agent Workspace: {_line_value(first_present(document, AGENT_WORKSPACE))}",
        f"Trigger event: {_line_value(first_present(document, TRIGGER_EVENT))}",
        f"Trigger channel: {_line_value(first_present(document, TRIGGER_CHANNEL))}",
        f"Trigger direction: {_line_value(first_present(document, TRIGGER_DIRECTION))}",
        "",
        "Full intake JSON:",
        json.dumps(document, indent=2, ensure_ascii=False),
    ]
    return "\n".join(lines)


class IntakeMailer:
    def __init__(self, settings: Settings, client: Optional[httpx.Client] = None):
        self.settings = settings
        self._client = client

    def send(self, document: Mapping[str, Any]) -> DeliveryResult:
        api_key = self.settings.RESEND_API_KEY
        receiver = self.settings.INTAKE_RECEIVER_EMAIL

        if api_key is None or not api_key.get_secret_value():
            logger.error("intake email not sent: RESEND_API_KEY is not configured")
            return DeliveryResult(ok=False, error="Missing RESEND_API_KEY")
        if not receiver:
            logger.error("intake email not sent: INTAKE_RECEIVER_EMAIL is not configured")
            return DeliveryResult(ok=False, error="Missing INTAKE_RECEIVER_EMAIL")

        payload = {
            "from": self.settings.INTAKE_SENDER,
            "to": [receiver],
            "subject": rules.EMAIL_SUBJECT,
            "text": render_email_text(document),
        }
        headers = {"Authorization": f"Bearer {api_key.get_secret_value()}"}

        try:
            if self._client is not None:
                response = self._client.post(self.settings.RESEND_API_URL, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=self.settings.EMAIL_TIMEOUT_S) as client:
                    response = client.post(self.settings.RESEND_API_URL, json=payload, headers=headers)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            logger.error("intake email failed: %s", exc)
            return DeliveryResult(ok=False, error=rules.DELIVERY_FAILED_MESSAGE)

        logger.info("intake email sent to %s", receiver)
        return DeliveryResult(ok=True, message=rules.DELIVERY_OK_MESSAGE)
