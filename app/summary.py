"""
Human-readable view of a stored blueprint.

Display only: nothing here changes the document. Stored documents may come
from older intake versions, so every lookup goes through an ordered list of
accessors and a missing value renders as a marker instead of failing.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Mapping, Sequence

from . import rules

Accessor = Callable[[Mapping[str, Any]], Any]


def path(*keys: str) -> Accessor:
    """Accessor that walks nested mappings, yielding None on any gap."""

    def get(document: Mapping[str, Any]) -> Any:
        node: Any = document
        for key in keys:
            if not isinstance(node, Mapping):
                return None
            node = node.get(key)
        return node

    return get


def pick_first(document: Mapping[str, Any], accessors: Sequence[Accessor]) -> Any:
    """Return the first accessor value that is neither None nor an empty string."""
    for accessor in accessors:
        value = accessor(document)
        if value is not None and value != "":
            return value
    return None


# Candidate locations, newest layout first.
CRM = (path("systems", "crm"), path("crm"))
CONTACT_CENTER = (
    path("systems", "contactCenterPlatform"),
    path("systems", "contactCenter"),
    path("contactCenterPlatform"),
    path("contactCenter"),
)
AGENT_WORKSPACE = (
    path("systems", "agentWorkspace"),
    path("systems", "agentDesktop"),
    path("agentWorkspace"),
    path("agentDesktop"),
)
OWNER_STRATEGY = (path("ownership", "ownerStrategy"), path("ownerStrategy"))
INTERACTION_ID_FIELD = (
    path("ownership", "interactionIdField"),
    path("ownership", "callIdField"),
    path("interactionIdField"),
    path("callIdField"),
)
PHONE_NORMALIZATION = (path("matching", "phoneNormalization"), path("matching", "normalization"))


def format_value(value: Any) -> str:
    if value is None:
        return rules.NOT_AVAILABLE
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value) if value else rules.NOT_AVAILABLE
    if isinstance(value, Mapping):
        return json.dumps(value, separators=(",", ":"))
    return str(value)


def to_matching_label(value: Any) -> str:
    if not isinstance(value, str):
        return format_value(value)
    return rules.MATCHING_LABELS.get(value, value)


def to_owner_strategy_label(value: Any) -> str:
    if not isinstance(value, str):
        return format_value(value)
    return rules.OWNER_STRATEGY_LABELS.get(value, value)


def customer_matching_line(strategy: Any) -> str:
    if not strategy:
        return rules.NOT_SPECIFIED

    values = list(strategy) if isinstance(strategy, (list, tuple)) else [strategy]
    has_phone = "ani_phone_match" in values
    has_external = rules.EXTERNAL_ID in values

    if has_phone and has_external:
        return "Phone number and external customer ID -> CRM contact"
    if has_external:
        return "External customer ID -> CRM contact"
    if has_phone:
        return "Phone number -> CRM contact"
    return ", ".join(to_matching_label(v) for v in values)


def operational_guarantees(document: Mapping[str, Any]) -> List[str]:
    """Plain-language promises implied by the reliability, security and ownership choices."""
    guarantees: List[str] = []
    idempotency_key = path("reliability", "idempotencyKey")(document)
    latency_target = path("reliability", "latencyTarget")(document)
    expected_volume = path("reliability", "expectedVolume")(document)
    logging_mode = path("security", "logging")(document)
    owner_strategy = pick_first(document, OWNER_STRATEGY)

    if idempotency_key:
        guarantees.append(
            f"Uses duplicate prevention key {idempotency_key} to avoid double-logging the same interaction"
        )

    if path("trigger", "event")(document) or latency_target:
        target = f" (target: {latency_target})" if latency_target else ""
        guarantees.append(f"Agent context appears on interaction acceptance{target}")

    if expected_volume in rules.HIGH_VOLUME_VALUES or latency_target in rules.LOW_LATENCY_VALUES:
        guarantees.append("Built for higher volume with asynchronous processing and retry-safe behavior")

    if logging_mode == "mask_pii":
        guarantees.append("PII is masked in logs")
    elif logging_mode == rules.NO_PAYLOAD_LOGGING:
        guarantees.append("No payload logging")

    if owner_strategy:
        guarantees.append(to_owner_strategy_label(owner_strategy))

    return guarantees


def build_summary(document: Mapping[str, Any]) -> Dict[str, Any]:
    """Summary view of a stored document, matching BlueprintSummary."""
    owner_strategy = pick_first(document, OWNER_STRATEGY)
    interaction_id_field = pick_first(document, INTERACTION_ID_FIELD)
    duplicate_key = pick_first(
        document, (path("reliability", "idempotencyKey"), lambda _: interaction_id_field)
    )

    return {
        "connectedSystems": {
            "crm": format_value(pick_first(document, CRM)),
            "contactCenter": format_value(pick_first(document, CONTACT_CENTER)),
            "agentWorkspace": format_value(pick_first(document, AGENT_WORKSPACE)),
        },
        "trigger": {
            "event": format_value(path("trigger", "event")(document)),
            "channel": format_value(path("trigger", "channel")(document)),
            "direction": format_value(path("trigger", "direction")(document)),
        },
        "crmActivity": {
            "objectType": format_value(path("crmActivity", "objectType")(document)),
            "subjectTemplate": format_value(path("crmActivity", "subjectTemplate")(document)),
            "associations": format_value(path("crmActivity", "associations")(document)),
        },
        "customerMatching": {
            "strategy": customer_matching_line(path("matching", "strategy")(document)),
            "normalization": format_value(pick_first(document, PHONE_NORMALIZATION)),
            "externalIdField": format_value(path("matching", "externalIdField")(document)),
        },
        "ownership": {
            "rule": to_owner_strategy_label(owner_strategy) if owner_strategy else rules.NOT_AVAILABLE,
            "interactionIdField": format_value(interaction_id_field),
        },
        "reliability": {
            "expectedVolume": format_value(path("reliability", "expectedVolume")(document)),
            "duplicatePrevention": (
                f"{duplicate_key} -> intended to avoid double-logging the same interaction"
                if duplicate_key
                else rules.NOT_SPECIFIED
            ),
            "latencyTarget": format_value(path("reliability", "latencyTarget")(document)),
        },
        "security": {
            "dataSensitivity": format_value(path("security", "dataSensitivity")(document)),
            "logging": format_value(path("security", "logging")(document)),
        },
        "operationalGuarantees": operational_guarantees(document),
    }
