"""
Intake rules and fixed vocabulary.

Allowed value sets, canonical document literals, advisory warning texts and
the wizard layout all live here so the validator, normalizer and summary
helpers agree on one source.
"""

BLUEPRINT_VERSION = "v1"
BLUEPRINT_MODE = "feedback_only"

OTHER = "other"  # sentinel: companion free-text name required

CRM_VALUES = ("hubspot", "salesforce", OTHER)
CONTACT_CENTER_VALUES = ("ringcentral", "five9", "genesys", "nice", OTHER)
AGENT_WORKSPACE_VALUES = (
    "native_ccp_desktop",
    "embedded_crm_panel",
    "custom_workspace",
    "hybrid_workspace",
    "unknown",
)
ENVIRONMENT_VALUES = ("sandbox", "demo")
DIRECTION_VALUES = ("inbound", "outbound", "both")
CRM_ACTIVITY_VALUES = ("engagement", "task", "note")
ASSOCIATION_VALUES = ("contact", "company", "deal")
MATCHING_VALUES = ("ani_phone_match", "external_id")
PHONE_NORMALIZATION_VALUES = ("us_e164", "as_is", OTHER)
CONTEXT_PLACEMENT_VALUES = ("interaction_tab", "sidebar", "unknown")
OWNER_STRATEGY_VALUES = ("map_agent_email", "fixed_owner", "unassigned")
VOLUME_VALUES = ("lt_100", "100_1000", "1000_10000", "gt_10000")
LATENCY_VALUES = ("best_effort", "under_2s", "under_500ms")
SENSITIVITY_VALUES = ("low", "pii", "regulated")
LOGGING_VALUES = ("mask_pii", "no_payload_logging")

EXTERNAL_ID = "external_id"
FIXED_OWNER = "fixed_owner"
REGULATED = "regulated"
NO_PAYLOAD_LOGGING = "no_payload_logging"
UNKNOWN_WORKSPACE = "unknown"

# Messages that replace pydantic's generic wording for the form.
FIELD_MESSAGES = {
    "subjectTemplate": "Subject template is required",
    "associations": "Select at least one association",
    "matchingStrategy": "Select at least one matching strategy",
    "contextFields": "Select at least one context field",
    "callIdField": "Interaction ID field is required",
    "idempotencyKey": "Idempotency key is required",
}

OTHER_CRM_MESSAGE = "Please specify the CRM name"
OTHER_CONTACT_CENTER_MESSAGE = "Please specify the contact center name"
EXTERNAL_ID_MESSAGE = "External ID field is required when using external ID matching"
FIXED_OWNER_MESSAGE = "Fixed owner is required when using fixed owner strategy"
REGULATED_LOGGING_MESSAGE = "For regulated data, use 'No payload logging' (recommended)."

WARN_ENVIRONMENT = "Evaluation-only: environment must be sandbox/demo."
WARN_UNKNOWN_WORKSPACE = (
    "Agent workspace not determined — context injection placement may vary by platform."
)
WARN_REGULATED = "Regulated data indicated — security review required before production use."

WIZARD_STEPS = (
    ("Systems", ("crm", "otherCrmName", "contactCenter", "otherContactCenterName", "agentWorkspace", "environment")),
    ("Trigger", ("direction", "voiceOnly")),
    ("CRM Activity", ("crmActivityObjectType", "subjectTemplate", "associations")),
    ("Matching", ("matchingStrategy", "phoneNormalization", "externalIdField")),
    ("Context Injection", ("contextFields", "customContextFields", "contextPlacement")),
    ("Ownership & Audit", ("ownerStrategy", "fixedOwner", "storeCallId", "callIdField")),
    ("Reliability", ("expectedVolume", "idempotencyKey", "latencyTarget")),
    ("Security", ("dataSensitivity", "logging")),
    ("Review & Submit", ()),
)

DEFAULT_INTAKE = {
    "mode": BLUEPRINT_MODE,
    "crm": "hubspot",
    "contactCenter": "ringcentral",
    "agentWorkspace": "native_ccp_desktop",
    "environment": "sandbox",
    "direction": "inbound",
    "voiceOnly": True,
    "crmActivityObjectType": "engagement",
    "subjectTemplate": "Interaction from {{ani}} to {{dnis}}",
    "associations": ["contact"],
    "matchingStrategy": ["ani_phone_match"],
    "phoneNormalization": "us_e164",
    "contextFields": ["contact.fullName", "company.name", "contact.email", "stats.openDeals"],
    "contextPlacement": "interaction_tab",
    "ownerStrategy": "map_agent_email",
    "storeCallId": True,
    "callIdField": "interaction_id",
    "expectedVolume": "100_1000",
    "idempotencyKey": "interactionId",
    "latencyTarget": "under_2s",
    "dataSensitivity": "pii",
    "logging": "mask_pii",
}

CONTEXT_FIELD_OPTIONS = (
    ("contact.fullName", "Contact full name"),
    ("company.name", "Company/Account name"),
    ("contact.email", "Email"),
    ("contact.phone", "Phone"),
    ("contact.lastActivityDate", "Last activity date"),
    ("stats.openDeals", "Open deals count"),
    ("stats.openTickets", "Open tickets/cases count"),
)

# Summary view
NOT_AVAILABLE = "N/A"
NOT_SPECIFIED = "Not specified"

MATCHING_LABELS = {
    "ani_phone_match": "Match by customer phone number",
    "external_id": "Match by external customer ID",
}

OWNER_STRATEGY_LABELS = {
    "map_agent_email": "Assign to the agent who handled the interaction",
    "fixed_owner": "Always assign to a fixed CRM owner or queue",
    "unassigned": "Leave CRM activity unassigned",
}

HIGH_VOLUME_VALUES = ("100_1000", "1000_10000", "gt_10000")
LOW_LATENCY_VALUES = ("under_2s", "under_500ms")

# Persistence
BLUEPRINT_KEY_PREFIX = "micro_si_blueprint_"
LAST_BLUEPRINT_KEY = "micro_si_last_blueprint_id"

# Transmission
EMAIL_SUBJECT = "New CRM <-> Contact Center Intake Received"
EMAIL_HEADING = "New CRM <-> Contact Center Intake"
DELIVERY_OK_MESSAGE = "Thanks - intake received."
DELIVERY_FAILED_MESSAGE = "Failed to send intake email"
BLUEPRINT_NOT_FOUND_MESSAGE = (
    "Blueprint not found. Please re-submit the intake to regenerate the blueprint."
)
