"""
Intake -> canonical blueprint.

Responsibilities (v1):
- custom context field splitting
- contact center name resolution + trigger derivation
- grouping into the nested blueprint shape
- nulling fields whose enabling option is off
- advisory warnings

Input must already have passed validate_intake; nothing here re-checks it.
"""

from __future__ import annotations

from typing import List, Optional

from . import rules
from .models import (
    Blueprint,
    ContextInjection,
    CrmActivity,
    Matching,
    Ownership,
    RawIntake,
    Reliability,
    Security,
    Systems,
    Trigger,
)


def split_custom_fields(text: Optional[str]) -> List[str]:
    """Split comma separated field names, trimming and dropping empty segments."""
    return [part.strip() for part in (text or "").split(",") if part.strip()]


def _only_if(enabled: bool, value: Optional[str]) -> Optional[str]:
    return value if enabled else None


def _warnings(blueprint: Blueprint) -> List[str]:
    warnings: List[str] = []

    # unreachable through validate_intake; environment is enum-constrained
    if blueprint.systems.environment not in rules.ENVIRONMENT_VALUES:
        warnings.append(rules.WARN_ENVIRONMENT)
    if blueprint.systems.agent_workspace == rules.UNKNOWN_WORKSPACE:
        warnings.append(rules.WARN_UNKNOWN_WORKSPACE)
    if blueprint.security.data_sensitivity == rules.REGULATED:
        warnings.append(rules.WARN_REGULATED)

    return warnings


def normalize_intake(intake: RawIntake) -> Blueprint:
    """
    Build the canonical blueprint for a validated intake.

    Deterministic: the same intake always yields an equal document. No
    identifier or timestamp is attached here; the caller assigns the id
    when persisting.
    """
    crm_is_other = intake.crm == rules.OTHER
    cc_is_other = intake.contact_center == rules.OTHER
    external_id = rules.EXTERNAL_ID in intake.matching_strategy
    fixed_owner = intake.owner_strategy == rules.FIXED_OWNER

    contact_center_name = intake.other_contact_center_name if cc_is_other else intake.contact_center

    blueprint = Blueprint(
        mode=intake.mode,
        systems=Systems(
            crm=intake.crm,
            other_crm_name=_only_if(crm_is_other, intake.other_crm_name),
            contact_center=intake.contact_center,
            other_contact_center_name=_only_if(cc_is_other, intake.other_contact_center_name),
            agent_workspace=intake.agent_workspace,
            environment=intake.environment,
        ),
        trigger=Trigger(
            event=f"{contact_center_name}.interaction.accepted",
            interaction_type="voice" if intake.voice_only else "generic",
            direction=intake.direction,
        ),
        crm_activity=CrmActivity(
            object_type=intake.crm_activity_object_type,
            subject_template=intake.subject_template,
            associations=list(intake.associations),
        ),
        matching=Matching(
            strategy=list(intake.matching_strategy),
            phone_normalization=intake.phone_normalization,
            external_id_field=_only_if(external_id, intake.external_id_field),
        ),
        context_injection=ContextInjection(
            fields=list(intake.context_fields),
            custom_fields=split_custom_fields(intake.custom_context_fields),
            placement=intake.context_placement,
        ),
        ownership=Ownership(
            owner_strategy=intake.owner_strategy,
            fixed_owner=_only_if(fixed_owner, intake.fixed_owner),
            store_interaction_id=intake.store_call_id,
            interaction_id_field=_only_if(intake.store_call_id, intake.call_id_field),
        ),
        reliability=Reliability(
            expected_volume=intake.expected_volume,
            idempotency_key=intake.idempotency_key,
            latency_target=intake.latency_target,
        ),
        security=Security(
            data_sensitivity=intake.data_sensitivity,
            logging=intake.logging,
        ),
    )
    blueprint.warnings = _warnings(blueprint)
    return blueprint


def blueprint_to_json(blueprint: Blueprint) -> str:
    """Render the blueprint as the JSON text that is stored and emailed."""
    return blueprint.model_dump_json(by_alias=True, indent=2)


def blueprint_to_dict(blueprint: Blueprint) -> dict:
    return blueprint.model_dump(mode="json", by_alias=True)
