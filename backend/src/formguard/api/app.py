"""FastAPI application: server-side validation of declared forms.

Replies use the shape the submission transport understands, so a form can
post straight to ``/api/forms/{name}/validate``.
"""

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from formguard.config import FormguardConfig
from formguard.controller import FormController
from formguard.forms.loader import FormLoader
from formguard.forms.options import get_form_options
from formguard.forms.schema import validate_forms_dir
from formguard.validation import validate_data

logger = logging.getLogger(__name__)

# Global instances (initialized on startup)
config: FormguardConfig | None = None
form_loader: FormLoader | None = None


class ValidateRequest(BaseModel):
    """Body of a validation request."""

    data: dict[str, Any] = Field(default_factory=dict)
    language: str | None = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load form definitions on startup."""
    global config, form_loader

    config = FormguardConfig.from_env()

    # Warn on schema problems, don't block startup
    issues = validate_forms_dir(config.forms_path)
    for issue in issues:
        if issue.severity == "error":
            logger.error("Form schema error: %s", issue)
        else:
            logger.warning("Form schema warning: %s", issue)

    form_loader = FormLoader(config.forms_path)
    form_loader.load_all()
    logger.info("Loaded %d forms from %s", len(form_loader.forms), config.forms_path)

    yield


app = FastAPI(title="formguard API", lifespan=lifespan)


def _controller(name: str, language: str | None = None) -> FormController:
    form = form_loader.get_form(name) if form_loader else None
    if form is None:
        raise HTTPException(status_code=404, detail=f"Form '{name}' not found")

    # A fresh controller per request keeps declared values untouched
    controller = FormController(form)
    declared = get_form_options(form).get("language")
    controller.set_language(language or declared or config.language)
    return controller


@app.get("/api/forms")
async def list_forms():
    return {"data": form_loader.list_forms() if form_loader else []}


@app.get("/api/forms/{name}")
async def get_form(name: str):
    """Return the effective rules of a form (callables are not serializable)."""
    controller = _controller(name)
    return {
        "name": name,
        "description": controller.form.description,
        "fields": list(controller.rules),
        "rules": {
            field: {
                rule: param for rule, param in rules.items() if not callable(param)
            }
            for field, rules in controller.rules.items()
        },
        "language": controller.options["language"],
    }


@app.get("/api/forms/{name}/messages")
async def get_messages(name: str, language: str | None = None):
    controller = _controller(name, language)
    return {
        "language": controller.options["language"],
        "messages": {
            field: {rule: controller.translate(text) for rule, text in rules.items()}
            for field, rules in controller.error_messages.items()
        },
    }


@app.post("/api/forms/{name}/validate")
async def validate_form(name: str, body: ValidateRequest):
    controller = _controller(name, body.language)
    result = validate_data(
        controller.rules,
        controller.methods,
        body.data,
        controller.error_messages,
        controller.translate,
    )
    errors = {field: messages for field, messages in result.items() if messages}
    if errors:
        return {"valid": False, "validationErrors": errors}
    return {"valid": True}
