"""
form_state.py — The FormState value object
==========================================
Everything the user has entered: one value per registered field plus the
course outline.  Passed explicitly to every core operation (completion,
assembly, export, persistence); there is no module-level form singleton.

A field missing from ``values`` is "not rendered by the current layout";
the completion evaluator treats it as filled.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Union

from syllabus_builder.fields import FIELD_REGISTRY, FieldId, FieldKind
from syllabus_builder.outline import OutlineModel

FieldValue = Union[str, bool]


@dataclass
class FormState:
    values:  dict[FieldId, FieldValue] = field(default_factory=dict)
    outline: OutlineModel = field(default_factory=OutlineModel.with_initial_module)

    @classmethod
    def empty(cls) -> "FormState":
        """Every field at its registry default, outline with one module / one class day."""
        values: dict[FieldId, FieldValue] = {}
        for fid, spec in FIELD_REGISTRY.items():
            values[fid] = False if spec.kind == FieldKind.CHECKBOX else spec.default
        return cls(values=values)

    def get(self, field_id: FieldId | str, default: FieldValue = "") -> FieldValue:
        return self.values.get(FieldId(field_id), default)

    def text(self, field_id: FieldId | str) -> str:
        """The field's value as trimmed text ('' when absent)."""
        value = self.get(field_id)
        if isinstance(value, bool):
            return "true" if value else ""
        return (value or "").strip()

    def set(self, field_id: FieldId | str, value: FieldValue) -> None:
        """Store *value*; raises ValueError for an unrecognised field id."""
        self.values[FieldId(field_id)] = value

    def snapshot(self) -> "FormState":
        """Deep, independent copy taken at the start of every export."""
        return FormState(values=dict(self.values), outline=copy.deepcopy(self.outline))
