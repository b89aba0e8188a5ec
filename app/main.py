import logging
from typing import Any, Dict, Optional

from fastapi import Body, Depends, FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from . import rules
from .config import Settings, get_settings
from .mailer import IntakeMailer
from .models import (
    Blueprint,
    ContextFieldOption,
    DeliveryResult,
    FormResponse,
    HealthResponse,
    LatestBlueprintResponse,
    StoredBlueprintResponse,
    SubmitResponse,
    ValidationResponse,
    WizardStep,
)
from .normalize import blueprint_to_dict, blueprint_to_json, normalize_intake
from .store import BlueprintStore, new_blueprint_id
from .summary import build_summary
from .validate import step_fields, validate_intake

logging.basicConfig(level=get_settings().LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="blueprint-intake",
    description="CRM <-> contact center intake: validation, normalized blueprints, summaries",
    version="0.1.0",
)


def get_store(settings: Settings = Depends(get_settings)) -> BlueprintStore:
    return BlueprintStore(settings.BLUEPRINT_STORE_DIR)


def get_mailer(settings: Settings = Depends(get_settings)) -> IntakeMailer:
    return IntakeMailer(settings)


def _validated(payload: Dict[str, Any]):
    result = validate_intake(payload)
    if not result.ok:
        raise HTTPException(status_code=422, detail=result.errors)
    return result.intake


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/intake/form", response_model=FormResponse)
def intake_form():
    return FormResponse(
        steps=[
            WizardStep(index=i, title=title, fields=list(fields))
            for i, (title, fields) in enumerate(rules.WIZARD_STEPS)
        ],
        defaults=rules.DEFAULT_INTAKE,
        context_field_options=[
            ContextFieldOption(id=field_id, label=label)
            for field_id, label in rules.CONTEXT_FIELD_OPTIONS
        ],
    )


@app.post("/intake/validate", response_model=ValidationResponse)
def intake_validate(
    payload: Dict[str, Any] = Body(...),
    step: Optional[int] = Query(default=None, ge=0, le=len(rules.WIZARD_STEPS) - 1),
):
    fields = step_fields(step) if step is not None else None
    result = validate_intake(payload, fields=fields)
    return {"ok": result.ok, "errors": result.errors}


@app.post("/intake/preview", response_model=Blueprint)
def intake_preview(payload: Dict[str, Any] = Body(...)):
    return normalize_intake(_validated(payload))


@app.post("/intake", response_model=SubmitResponse)
def intake_submit(
    payload: Dict[str, Any] = Body(...),
    store: BlueprintStore = Depends(get_store),
    mailer: IntakeMailer = Depends(get_mailer),
):
    blueprint = normalize_intake(_validated(payload))
    blueprint_id = new_blueprint_id()

    # a failed save is reported as stored=False; the email is still sent
    stored = True
    try:
        store.save(blueprint_id, blueprint_to_json(blueprint))
    except OSError:
        logger.exception("could not store blueprint %s", blueprint_id)
        stored = False

    delivery = mailer.send(blueprint_to_dict(blueprint))

    return SubmitResponse(
        id=blueprint_id,
        stored=stored,
        delivered=delivery.ok,
        message=(delivery.message if delivery.ok else delivery.error) or "",
        blueprint=blueprint,
    )


@app.post("/intake/send", response_model=DeliveryResult, response_model_exclude_none=True)
def intake_send(
    document: Dict[str, Any] = Body(...),
    mailer: IntakeMailer = Depends(get_mailer),
):
    result = mailer.send(document)
    if not result.ok:
        return JSONResponse(status_code=500, content=result.model_dump(exclude_none=True))
    return result


@app.get("/blueprint/latest", response_model=LatestBlueprintResponse)
def blueprint_latest(store: BlueprintStore = Depends(get_store)):
    blueprint_id = store.last_id()
    if blueprint_id is None:
        raise HTTPException(status_code=404, detail=rules.BLUEPRINT_NOT_FOUND_MESSAGE)
    return {"id": blueprint_id}


@app.get("/blueprint/{blueprint_id}", response_model=StoredBlueprintResponse)
def blueprint_view(blueprint_id: str, store: BlueprintStore = Depends(get_store)):
    document = store.load(blueprint_id)
    if document is None:
        raise HTTPException(status_code=404, detail=rules.BLUEPRINT_NOT_FOUND_MESSAGE)
    return StoredBlueprintResponse(
        id=blueprint_id,
        blueprint=document,
        summary=build_summary(document),
    )
