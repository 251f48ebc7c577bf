"""
persistence.py — Save / load a syllabus draft as JSON
=====================================================
File format: one UTF-8 JSON object whose keys are the FieldId values plus
``courseOutline``::

    {
      "courseTitle": "…",
      …
      "courseOutline": {
        "modules": [
          {"title": "…", "description": "…",
           "classDays": [{"title": "…", "content": "…"}]}
        ]
      }
    }

Loading is tolerant: unknown keys are ignored (newer drafts), missing keys
keep the current value (older drafts), and a legacy draft whose
``courseOutline`` is a bare string leaves the current outline untouched.
Malformed JSON raises ParseError and never mutates the caller's state.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from syllabus_builder.config import get_settings
from syllabus_builder.errors import ParseError
from syllabus_builder.fields import FIELD_REGISTRY, FieldId, FieldKind
from syllabus_builder.form_state import FieldValue, FormState
from syllabus_builder.outline import OutlineModel

logger = logging.getLogger(__name__)

OUTLINE_KEY = "courseOutline"


# ─── Outline schema (validation only) ────────────────────────────────────────

class ClassDayDoc(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    title:   Optional[str] = ""
    content: Optional[str] = ""


class ModuleDoc(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, coerce_numbers_to_str=True)

    title:       Optional[str] = ""
    description: Optional[str] = ""
    class_days:  Optional[list[ClassDayDoc]] = Field(default_factory=list, alias="classDays")


class OutlineDoc(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    modules: Optional[list[ModuleDoc]] = Field(default_factory=list)


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _coerce(field_id: FieldId, value: Any) -> Optional[FieldValue]:
    """Convert a stored JSON value to the field's in-memory type; None → skip."""
    kind = FIELD_REGISTRY[field_id].kind
    if kind == FieldKind.CHECKBOX:
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() in ("true", "on", "1", "yes")
    if value is None:
        return None
    if isinstance(value, (dict, list)):
        logger.warning("Ignoring non-text value for %s in draft", field_id.value)
        return None
    return str(value)


# ─── Public API ──────────────────────────────────────────────────────────────

def serialize(state: FormState) -> str:
    """FormState → pretty-printed JSON draft."""
    data: dict[str, Any] = {}
    for fid in FIELD_REGISTRY:
        if fid in state.values:
            data[fid.value] = state.values[fid]
    data[OUTLINE_KEY] = state.outline.to_serializable()
    return json.dumps(data, indent=2, ensure_ascii=False)


def deserialize(text: str | bytes, base: Optional[FormState] = None) -> FormState:
    """
    JSON draft → new FormState built on top of *base* (defaults when None).

    Raises
    ------
    ParseError  malformed JSON, a non-object document, or an outline of the
                wrong shape.  *base* is never modified.
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise ParseError("Error loading file: not UTF-8 text") from exc

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.warning("Draft is not valid JSON: %s", exc)
        raise ParseError("Error loading file: Invalid JSON format") from exc

    if not isinstance(data, dict):
        raise ParseError("Error loading file: expected a JSON object at the top level")

    state = base.snapshot() if base is not None else FormState.empty()

    known = {f.value for f in FieldId}
    for key, value in data.items():
        if key in known:
            coerced = _coerce(FieldId(key), value)
            if coerced is not None:
                state.values[FieldId(key)] = coerced
        elif key != OUTLINE_KEY:
            logger.debug("Ignoring unknown draft key %r", key)

    outline_raw = data.get(OUTLINE_KEY)
    if isinstance(outline_raw, dict):
        try:
            doc = OutlineDoc.model_validate(outline_raw)
        except PydanticValidationError as exc:
            logger.warning("Draft course outline has the wrong shape: %s", exc)
            raise ParseError("Error loading file: course outline is not in the expected format") from exc
        state.outline = OutlineModel.from_serializable(doc.model_dump(by_alias=True))
    elif outline_raw is not None and not isinstance(outline_raw, str):
        raise ParseError("Error loading file: course outline is not in the expected format")
    # str / None: legacy or absent outline, keep the current one

    return state


def draft_filename(state: FormState, today: Optional[date] = None) -> str:
    """``syllabus_{courseNumber|draft}_{YYYY-MM-DD}.json``"""
    number = state.text(FieldId.COURSE_NUMBER) or get_settings().app.draft_label
    return f"syllabus_{number}_{(today or date.today()).isoformat()}.json"
