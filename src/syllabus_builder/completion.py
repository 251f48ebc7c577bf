"""
completion.py — Per-section completion status
=============================================
Drives the coloured badges in the sidebar table of contents.  Re-run on
every Streamlit rerun (i.e. on every edit); pure, no side effects.

Rules
-----
  validator section   Complete iff the validator passes, else Incomplete
  required fields     Complete iff every required field is filled, else Incomplete
  optional fields     Complete if any optional field is filled, else Optional
  no fields           Optional
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from syllabus_builder.fields import (
    FIELD_REGISTRY,
    FieldId,
    FieldKind,
    FieldSpec,
    Section,
    SectionValidator,
    all_sections,
)
from syllabus_builder.form_state import FieldValue, FormState


class SectionStatus(str, Enum):
    COMPLETE   = "complete"
    INCOMPLETE = "incomplete"
    OPTIONAL   = "optional"


STATUS_ICON: dict[SectionStatus, str] = {
    SectionStatus.COMPLETE:   "✅",
    SectionStatus.INCOMPLETE: "⭕",
    SectionStatus.OPTIONAL:   "➖",
}


def is_filled(spec: FieldSpec, value: Optional[FieldValue]) -> bool:
    """Field-filled predicate by kind.  ``None`` means the field is not rendered."""
    if value is None:
        return True
    if spec.kind == FieldKind.CHECKBOX:
        return value is True
    if spec.kind == FieldKind.CHOICE:
        return value != ""
    return str(value).strip() != ""


def is_field_filled(field_id: FieldId, state: FormState) -> bool:
    return is_filled(FIELD_REGISTRY[field_id], state.values.get(field_id))


def _run_validator(validator: SectionValidator, state: FormState) -> bool:
    if validator == SectionValidator.OUTLINE_HAS_COMPLETE_DAY:
        return state.outline.is_non_empty()
    raise ValueError(f"Unknown section validator: {validator}")


def evaluate(section: Section, state: FormState) -> SectionStatus:
    if section.validator is not None:
        ok = _run_validator(section.validator, state)
        return SectionStatus.COMPLETE if ok else SectionStatus.INCOMPLETE

    if section.required_fields:
        if all(is_field_filled(f, state) for f in section.required_fields):
            return SectionStatus.COMPLETE
        return SectionStatus.INCOMPLETE

    if section.optional_fields:
        if any(is_field_filled(f, state) for f in section.optional_fields):
            return SectionStatus.COMPLETE
        return SectionStatus.OPTIONAL

    return SectionStatus.OPTIONAL


def evaluate_all(state: FormState) -> dict[str, SectionStatus]:
    """Section id → status, in table-of-contents order."""
    return {s.id: evaluate(s, state) for s in all_sections()}


def completion_ratio(statuses: dict[str, SectionStatus]) -> float:
    """Share of non-optional sections that are complete (1.0 when there are none)."""
    tracked = [s for s in statuses.values() if s != SectionStatus.OPTIONAL]
    if not tracked:
        return 1.0
    return sum(1 for s in tracked if s == SectionStatus.COMPLETE) / len(tracked)
