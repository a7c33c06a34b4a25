"""
HTTP adapter for Prompt Studio.

Architectural role:
- Serve the browser form (the rendering surface) and a JSON API over the
  prompting layer.
- Enforce adapter-level input validation.
- Stay stateless: every request carries the field values it operates on; the
  browser page holds the live field state for its own session.

Endpoint responsibilities:
- `GET /`: the form page.
- `GET /v1/templates`, `GET /v1/templates/{name}`: template catalog.
- `GET /v1/tones`: default tone preset palette.
- `GET /v1/creativity`: creativity describer.
- `GET /v1/settings`: toast duration and creativity slider range for the page.
- `POST /v1/compose`: compose a prompt from submitted fields.
- `POST /v1/templates/{name}/apply`: apply a template over submitted fields.
- `POST /v1/reset`: composition of the default (empty) fields.

Input validation behavior:
- Unparseable JSON body -> HTTP 400.
- Body or `fields` that is not an object -> HTTP 400.
- Field values that are not strings or numbers -> HTTP 400.
- Unknown field keys are ignored.
- Numeric creativity outside 0-10 is clamped to the nearest bound.
- Unknown template on lookup -> HTTP 404; on apply -> fields returned
  unchanged with `applied: false`.

Error handling strategy:
- Explicit validation failures return structured JSON errors.
- Unexpected exceptions follow FastAPI default exception handling.

Side effects:
- Reads the static page from disk per request.
- Configures process logging at server startup (lifespan), not at import.
- Emits debug logs only when `DEBUG == "true"`.
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from prompt_studio.config import (
    CREATIVITY_MAX,
    CREATIVITY_MIN,
    DEFAULT_CREATIVITY,
    STATIC_DIR,
    TOAST_SECONDS,
    configure_logging,
)
from prompt_studio.prompting.fields import FieldStore, clamp_creativity
from prompt_studio.prompting.prompt_builder import (
    compose_prompt,
    creativity_label,
    describe_creativity,
)
from prompt_studio.prompting.templates import (
    DEFAULT_TONE_PRESETS,
    TEMPLATES,
    apply_template,
    get_template,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure process logging when the server starts."""
    configure_logging()
    yield


app = FastAPI(title="Prompt Studio", lifespan=lifespan)


# ============================================================
# Request Schema
# ============================================================

class PromptFields(BaseModel):
    """Submitted field values; missing fields take their empty defaults."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    role: str = ""
    goal: str = ""
    context: str = ""
    inputs: str = ""
    steps: str = ""
    tone: str = ""
    examples: str = ""
    format: str = ""
    constraints: str = ""
    creativity: str = DEFAULT_CREATIVITY
    priority: str = ""

    @field_validator("creativity")
    @classmethod
    def clamp_to_slider_range(cls, value):
        return clamp_creativity(value)


class FieldsRequest(BaseModel):
    """Body shape shared by compose and apply endpoints."""

    model_config = ConfigDict(extra="ignore")

    fields: PromptFields = Field(default_factory=PromptFields)


class RequestError(Exception):
    """Adapter-level validation failure carried to a JSON 400 response."""


async def read_fields(request: Request) -> FieldStore:
    """Parse the request body into a fresh `FieldStore`.

    Raises:
        RequestError: when the body is not valid JSON or does not match
            `FieldsRequest`.
    """
    try:
        body = await request.json()
    except ValueError:
        raise RequestError("Request body must be valid JSON")

    if not isinstance(body, dict):
        raise RequestError("Request body must be a JSON object")

    try:
        parsed = FieldsRequest.model_validate(body)
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"])
        raise RequestError(f"Invalid value for {location}: {first['msg']}")

    return FieldStore(parsed.fields.model_dump())


def error_response(message, status_code=400):
    return JSONResponse(status_code=status_code, content={"error": message})


# ============================================================
# Response Formatting
# ============================================================

def composition_payload(store: FieldStore, **extra) -> dict:
    """Shape one composition for the rendering surface."""
    composed = compose_prompt(store)
    payload = {
        "object": "prompt.composition",
        "fields": store.snapshot(),
        "prompt": composed.text,
        "word_count": composed.word_count,
        "word_count_label": composed.word_count_label,
        "rationale": list(composed.rationale),
        "creativity_label": creativity_label(store["creativity"]),
    }
    payload.update(extra)
    return payload


def template_payload(name, template) -> dict:
    return {"id": name, "object": "template", "fields": dict(template)}


# ============================================================
# Form Page
# ============================================================

@app.get("/")
def index():
    """Serve the form page."""
    return FileResponse(os.path.join(STATIC_DIR, "index.html"), media_type="text/html")


# ============================================================
# Catalog Endpoints
# ============================================================

@app.get("/v1/templates")
def list_templates():
    return {
        "object": "list",
        "data": [template_payload(name, template) for name, template in TEMPLATES.items()],
    }


@app.get("/v1/templates/{name}")
def read_template(name: str):
    template = get_template(name)
    if template is None:
        return error_response("Unknown template", status_code=404)
    return template_payload(name, template)


@app.get("/v1/tones")
def list_tones():
    return {
        "object": "list",
        "data": [preset._asdict() for preset in DEFAULT_TONE_PRESETS],
    }


@app.get("/v1/creativity")
def describe(value: str = ""):
    """Describe a creativity slider value; non-numeric input counts as 0."""
    return {
        "value": value,
        "description": describe_creativity(value),
        "label": creativity_label(value),
    }


@app.get("/v1/settings")
def read_settings():
    """Settings the form page needs: toast duration and slider range."""
    return {
        "toast_seconds": TOAST_SECONDS,
        "creativity_min": CREATIVITY_MIN,
        "creativity_max": CREATIVITY_MAX,
        "default_creativity": DEFAULT_CREATIVITY,
    }


# ============================================================
# Composition Endpoints
# ============================================================

@app.post("/v1/compose")
async def compose(request: Request):
    """
    Compose a prompt from submitted field values.

    Request lifecycle:
    1. Parse `{"fields": {...}}`; missing fields take their defaults.
    2. Compose prompt text, word count, and rationale.
    3. Return the composition together with the normalized fields.
    """
    try:
        store = await read_fields(request)
    except RequestError as exc:
        return error_response(str(exc))

    logger.debug("Composing prompt for fields=%r", store.snapshot())
    return composition_payload(store)


@app.post("/v1/templates/{name}/apply")
async def apply(name: str, request: Request):
    """
    Apply a catalog template over submitted field values.

    Unknown template names leave the submitted fields untouched; the response
    then carries `applied: false` and the unchanged composition.
    """
    try:
        store = await read_fields(request)
    except RequestError as exc:
        return error_response(str(exc))

    applied = apply_template(name, store)
    logger.debug("Template %r applied=%s", name, applied)
    return composition_payload(store, template=name, applied=applied)


@app.post("/v1/reset")
def reset():
    """Return the composition of the default fields (creativity at its default)."""
    return composition_payload(FieldStore())
