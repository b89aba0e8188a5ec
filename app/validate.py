"""
Intake validation.

Field rules (enums, lengths, required values) are declared on RawIntake and
checked by pydantic. Cross-field rules are checked here, each on its own, so
one broken step never hides another step's errors. A cross-field rule only
runs once the fields it depends on are present and valid.

Invalid input is a normal outcome: nothing here raises for bad payloads.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

from . import rules
from .models import IntakeValidation, RawIntake

logger = logging.getLogger(__name__)

_ALIASES = {name: field.alias or name for name, field in RawIntake.model_fields.items()}

# pydantic error types that the form reports with its own wording
_REWORDED = {"missing", "string_too_short", "too_short"}


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _by_alias(payload: Mapping[str, Any]) -> Dict[str, Any]:
    return {_ALIASES.get(key, key): value for key, value in payload.items()}


_CROSS_FIELD_RULES = (
    # (field reported, fields it depends on, violated?, message)
    (
        "otherCrmName",
        ("crm",),
        lambda data: data["crm"] == rules.OTHER and _blank(data.get("otherCrmName")),
        rules.OTHER_CRM_MESSAGE,
    ),
    (
        "otherContactCenterName",
        ("contactCenter",),
        lambda data: data["contactCenter"] == rules.OTHER
        and _blank(data.get("otherContactCenterName")),
        rules.OTHER_CONTACT_CENTER_MESSAGE,
    ),
    (
        "externalIdField",
        ("matchingStrategy",),
        lambda data: rules.EXTERNAL_ID in data["matchingStrategy"]
        and _blank(data.get("externalIdField")),
        rules.EXTERNAL_ID_MESSAGE,
    ),
    (
        "fixedOwner",
        ("ownerStrategy",),
        lambda data: data["ownerStrategy"] == rules.FIXED_OWNER and _blank(data.get("fixedOwner")),
        rules.FIXED_OWNER_MESSAGE,
    ),
    (
        "logging",
        ("dataSensitivity", "logging"),
        lambda data: data["dataSensitivity"] == rules.REGULATED
        and data["logging"] != rules.NO_PAYLOAD_LOGGING,
        rules.REGULATED_LOGGING_MESSAGE,
    ),
)


def _field_errors(data: Dict[str, Any]) -> Tuple[Optional[RawIntake], Dict[str, str]]:
    try:
        return RawIntake.model_validate(data), {}
    except ValidationError as exc:
        errors: Dict[str, str] = {}
        for err in exc.errors():
            loc = err.get("loc") or ("__all__",)
            field = _ALIASES.get(str(loc[0]), str(loc[0]))
            message = err["msg"]
            if err["type"] in _REWORDED and field in rules.FIELD_MESSAGES:
                message = rules.FIELD_MESSAGES[field]
            errors.setdefault(field, message)
        return None, errors


def step_fields(step: int) -> Tuple[str, ...]:
    """Field keys collected by wizard step ``step`` (0-based)."""
    return rules.WIZARD_STEPS[step][1]


def validate_intake(
    payload: Mapping[str, Any],
    fields: Optional[Iterable[str]] = None,
) -> IntakeValidation:
    """
    Validate a raw intake payload.

    Returns one message per offending field, keyed by its camelCase name.
    When ``fields`` is given only errors for those keys are reported, which is
    how a single wizard step is checked before moving on; the typed intake is
    returned only from a full, successful validation.
    """
    data = _by_alias(payload)
    intake, errors = _field_errors(data)

    for field, depends_on, violated, message in _CROSS_FIELD_RULES:
        if any(name not in data or name in errors for name in depends_on):
            continue
        if violated(data):
            errors.setdefault(field, message)

    if fields is not None:
        scope = set(fields)
        errors = {key: msg for key, msg in errors.items() if key in scope}
        return IntakeValidation(ok=not errors, errors=errors)

    if errors:
        logger.info("intake rejected: %s", ", ".join(sorted(errors)))
        return IntakeValidation(ok=False, errors=errors)

    return IntakeValidation(ok=True, intake=intake)
