from __future__ import annotations

from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StringConstraints
from pydantic.alias_generators import to_camel

from . import rules

Crm = Literal[rules.CRM_VALUES]
ContactCenter = Literal[rules.CONTACT_CENTER_VALUES]
AgentWorkspace = Literal[rules.AGENT_WORKSPACE_VALUES]
Environment = Literal[rules.ENVIRONMENT_VALUES]
Direction = Literal[rules.DIRECTION_VALUES]
CrmActivityType = Literal[rules.CRM_ACTIVITY_VALUES]
Association = Literal[rules.ASSOCIATION_VALUES]
MatchingStrategy = Literal[rules.MATCHING_VALUES]
PhoneNormalization = Literal[rules.PHONE_NORMALIZATION_VALUES]
ContextPlacement = Literal[rules.CONTEXT_PLACEMENT_VALUES]
OwnerStrategy = Literal[rules.OWNER_STRATEGY_VALUES]
Volume = Literal[rules.VOLUME_VALUES]
Latency = Literal[rules.LATENCY_VALUES]
Sensitivity = Literal[rules.SENSITIVITY_VALUES]
LoggingMode = Literal[rules.LOGGING_VALUES]

TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
RequiredStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RawIntake(CamelModel):
    """One wizard session's selections, after field-level validation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    mode: Literal["feedback_only"] = rules.BLUEPRINT_MODE

    # systems
    crm: Crm
    other_crm_name: Optional[TrimmedStr] = None
    contact_center: ContactCenter
    other_contact_center_name: Optional[TrimmedStr] = None
    agent_workspace: AgentWorkspace
    environment: Environment

    # trigger
    direction: Direction
    voice_only: bool

    # CRM activity
    crm_activity_object_type: CrmActivityType
    subject_template: str = Field(min_length=5)
    associations: List[Association] = Field(min_length=1)

    # matching
    matching_strategy: List[MatchingStrategy] = Field(min_length=1)
    phone_normalization: PhoneNormalization
    external_id_field: Optional[TrimmedStr] = None

    # context injection
    context_fields: List[str] = Field(min_length=1)
    custom_context_fields: Optional[TrimmedStr] = None
    context_placement: ContextPlacement

    # ownership & audit
    owner_strategy: OwnerStrategy
    fixed_owner: Optional[TrimmedStr] = None
    store_call_id: bool
    call_id_field: RequiredStr

    # reliability
    expected_volume: Volume
    idempotency_key: RequiredStr
    latency_target: Latency

    # security
    data_sensitivity: Sensitivity
    logging: LoggingMode


class IntakeValidation(BaseModel):
    ok: bool
    errors: Dict[str, str] = Field(default_factory=dict)
    intake: Optional[RawIntake] = None


class Systems(CamelModel):
    crm: str
    other_crm_name: Optional[str] = None
    contact_center: str
    other_contact_center_name: Optional[str] = None
    agent_workspace: str
    environment: str


class Trigger(CamelModel):
    event: str
    interaction_type: Literal["voice", "generic"]
    direction: str


class CrmActivity(CamelModel):
    object_type: str
    subject_template: str
    associations: List[str]


class Matching(CamelModel):
    strategy: List[str]
    phone_normalization: str
    external_id_field: Optional[str] = None


class ContextInjection(CamelModel):
    fields: List[str]
    custom_fields: List[str] = Field(default_factory=list)
    placement: str


class Ownership(CamelModel):
    owner_strategy: str
    fixed_owner: Optional[str] = None
    store_interaction_id: bool
    interaction_id_field: Optional[str] = None


class Reliability(CamelModel):
    expected_volume: str
    idempotency_key: str
    latency_target: str


class Security(CamelModel):
    data_sensitivity: str
    logging: str


class Blueprint(CamelModel):
    """The canonical integration blueprint, serialized with camelCase keys."""

    version: Literal["v1"] = rules.BLUEPRINT_VERSION
    mode: Literal["feedback_only"] = rules.BLUEPRINT_MODE
    systems: Systems
    trigger: Trigger
    crm_activity: CrmActivity
    matching: Matching
    context_injection: ContextInjection
    ownership: Ownership
    reliability: Reliability
    security: Security
    warnings: List[str] = Field(default_factory=list)


class BlueprintSummary(CamelModel):
    connected_systems: Dict[str, str]
    trigger: Dict[str, str]
    crm_activity: Dict[str, str]
    customer_matching: Dict[str, str]
    ownership: Dict[str, str]
    reliability: Dict[str, str]
    security: Dict[str, str]
    operational_guarantees: List[str] = Field(default_factory=list)


class DeliveryResult(BaseModel):
    ok: bool
    message: Optional[str] = None
    error: Optional[str] = None


class WizardStep(BaseModel):
    index: int
    title: str
    fields: List[str] = Field(default_factory=list)


class ContextFieldOption(BaseModel):
    id: str
    label: str


class FormResponse(CamelModel):
    steps: List[WizardStep]
    defaults: Dict[str, Any]
    context_field_options: List[ContextFieldOption]


class ValidationResponse(BaseModel):
    ok: bool
    errors: Dict[str, str] = Field(default_factory=dict)


class SubmitResponse(BaseModel):
    id: str
    stored: bool
    delivered: bool
    message: str
    blueprint: Blueprint


class StoredBlueprintResponse(BaseModel):
    id: str
    blueprint: Dict[str, Any]
    summary: BlueprintSummary


class LatestBlueprintResponse(BaseModel):
    id: str


class HealthResponse(BaseModel):
    ok: bool = True
