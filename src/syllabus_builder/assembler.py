"""
assembler.py – FormState → format-neutral content blocks
========================================================
``assemble(state)`` turns a FormState snapshot into the ordered list of
ContentBlocks that every renderer consumes (DOCX, PDF, HTML preview), so
all outputs share one heading order and one set of optional-section
rules.

  Heading(text, level)   0 = course title, 1 = section, 2 = sub-block / module
  Paragraph(text)        one line / paragraph of body text
  Table(header, rows)    two-column class-day table of one outline module

Before assembly, choice fields are resolved from their stored option
codes to display labels, and the export gate runs: every required field
must be non-blank and the outline must hold at least one module with at
least one class day.  A failing gate raises ValidationError naming every
missing field; nothing is partially rendered.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from syllabus_builder.config import Settings, get_settings
from syllabus_builder.errors import ValidationError
from syllabus_builder.fields import CHOICE_FIELDS, FieldId, humanize_field_id, resolve_choice_label
from syllabus_builder.form_state import FormState
from syllabus_builder.outline import OUTLINE_TABLE_HEADER, format_class_days


# ─── Content blocks ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Heading:
    text:  str
    level: int = 1


@dataclass(frozen=True)
class Paragraph:
    text: str


@dataclass(frozen=True)
class Table:
    header: tuple[str, ...]
    rows:   tuple[tuple[str, ...], ...]

    def as_plain_text(self) -> str:
        """Rows flattened to the outline's plain-text class-day layout."""
        return format_class_days([(row[0], row[1]) for row in self.rows])


ContentBlock = Union[Heading, Paragraph, Table]


# ─── Export gate ─────────────────────────────────────────────────────────────

EXPORT_REQUIRED_FIELDS: tuple[FieldId, ...] = (
    FieldId.COURSE_TITLE,
    FieldId.COURSE_NUMBER,
    FieldId.TERM,
    FieldId.CREDITS,
    FieldId.INSTRUCTOR_NAME,
    FieldId.OFFICE_HOURS,
    FieldId.CLASS_SCHEDULE,
    FieldId.COURSE_DESCRIPTION,
    FieldId.LEARNING_OUTCOMES,
    FieldId.ASSIGNMENT_TYPES,
    FieldId.GRADING_PERCENTAGES,
    FieldId.DUE_DATES_POLICY,
    FieldId.ACADEMIC_INTEGRITY,
    FieldId.INTEGRITY_OF_CREDIT,
    FieldId.GRADING_GUIDELINES,
)

NO_MODULES_MESSAGE   = "Please add at least one module to the course outline."
NO_CLASS_DAY_MESSAGE = "Please add at least one class day to the course outline."


def resolve_choices(state: FormState) -> FormState:
    """Copy of *state* with every choice field replaced by its display label."""
    resolved = state.snapshot()
    for fid in CHOICE_FIELDS:
        value = resolved.values.get(fid)
        if isinstance(value, str) and value:
            resolved.values[fid] = resolve_choice_label(fid, value)
    return resolved


def check_export_ready(state: FormState) -> Optional[ValidationError]:
    """Return a ValidationError describing every problem, or None when export may proceed."""
    missing = [humanize_field_id(f) for f in EXPORT_REQUIRED_FIELDS if not state.text(f)]

    problems: list[str] = []
    if not state.outline.modules:
        problems.append(NO_MODULES_MESSAGE)
    elif not state.outline.has_class_days():
        problems.append(NO_CLASS_DAY_MESSAGE)

    if missing or problems:
        return ValidationError(missing, problems)
    return None


# ─── Assembly ────────────────────────────────────────────────────────────────

def _lines(text: str) -> list[Paragraph]:
    """One paragraph per line; a blank line stays visible as a single space."""
    if not text:
        return []
    return [Paragraph(line or " ") for line in text.split("\n")]


def _section(blocks: list[ContentBlock], heading: str, text: str, per_line: bool = True) -> None:
    blocks.append(Heading(heading, 1))
    if per_line:
        blocks.extend(_lines(text))
    elif text:
        blocks.append(Paragraph(text))


def assemble(
    state: FormState,
    settings: Optional[Settings] = None,
    validate: bool = True,
) -> list[ContentBlock]:
    """
    Build the block sequence for *state*.

    Parameters
    ----------
    state    : FormState — not modified
    settings : Settings (optional) — institution subtitle and heading names
    validate : bool — run the export gate first (the live preview skips it)

    Raises
    ------
    ValidationError when *validate* is set and required content is missing.
    """
    settings = settings or get_settings()
    data = resolve_choices(state)

    if validate:
        error = check_export_ready(data)
        if error is not None:
            raise error

    t = data.text
    blocks: list[ContentBlock] = [Heading(t(FieldId.COURSE_TITLE), 0)]
    if settings.institution.is_configured:
        blocks.append(Paragraph(settings.institution.name))

    # ── Basic course information ──────────────────────────────────────────────
    blocks.append(Paragraph(f"Course Number / Section: {t(FieldId.COURSE_NUMBER)}"))
    blocks.append(Paragraph(f"Term: {t(FieldId.TERM)}"))
    blocks.append(Paragraph(f"Credits: {t(FieldId.CREDITS)}"))
    if t(FieldId.PREREQUISITES):
        blocks.append(Paragraph(f"Prerequisites: {t(FieldId.PREREQUISITES)}"))
    blocks.append(Paragraph(f"Instructor Name: {t(FieldId.INSTRUCTOR_NAME)}"))
    blocks.append(Paragraph(f"Office Hours: {t(FieldId.OFFICE_HOURS)}"))
    blocks.append(Paragraph(f"Class Schedule: {t(FieldId.CLASS_SCHEDULE)}"))

    _section(blocks, "Course Description", t(FieldId.COURSE_DESCRIPTION), per_line=False)
    _section(blocks, "Learning Outcomes", t(FieldId.LEARNING_OUTCOMES))

    if t(FieldId.COMMUNICATION_STRATEGY):
        _section(blocks, "Communication Strategy", t(FieldId.COMMUNICATION_STRATEGY))
    if t(FieldId.TECHNICAL_REQUIREMENTS):
        _section(blocks, "Technical Requirements", t(FieldId.TECHNICAL_REQUIREMENTS))

    # ── Requirements: three labelled sub-blocks ───────────────────────────────
    blocks.append(Heading("Course Requirements and Assignments", 1))
    for label, fid in (
        ("Assignment Types and Descriptions:", FieldId.ASSIGNMENT_TYPES),
        ("Grading Percentages:",               FieldId.GRADING_PERCENTAGES),
        ("Due Dates and Late Policy:",         FieldId.DUE_DATES_POLICY),
    ):
        blocks.append(Heading(label, 2))
        blocks.extend(_lines(t(fid)))

    # ── Course outline ────────────────────────────────────────────────────────
    blocks.append(Heading("Course Outline", 1))
    for module in data.outline.exported_modules():
        if module.title:
            blocks.append(Heading(module.title, 2))
            if module.description:
                blocks.extend(_lines(module.description))
        if module.class_days:
            blocks.append(Table(
                header=OUTLINE_TABLE_HEADER,
                rows=tuple((d.title, d.content) for d in module.class_days),
            ))

    # ── Policy sections, fixed order ──────────────────────────────────────────
    _section(blocks, "Academic Integrity", t(FieldId.ACADEMIC_INTEGRITY), per_line=False)
    _section(blocks, settings.institution.code_of_conduct_heading, t(FieldId.CODE_OF_CONDUCT))
    _section(blocks, "Integrity of Credit", t(FieldId.INTEGRITY_OF_CREDIT), per_line=False)
    _section(blocks, "General Conduct & Behavior", t(FieldId.GENERAL_CONDUCT))
    if t(FieldId.GRADING_GUIDELINES):
        _section(blocks, "Grading Guidelines", t(FieldId.GRADING_GUIDELINES), per_line=False)
    _section(blocks, "Student Accessibility", t(FieldId.STUDENT_ACCESSIBILITY))

    for heading, fid, per_line in (
        ("Student Wellness",                   FieldId.STUDENT_WELLNESS,      False),
        ("Name Pronunciation and Pronouns",    FieldId.NAME_PRONOUNS,         True),
        ("Religious Observances and Absences", FieldId.RELIGIOUS_OBSERVANCES, False),
        ("Electronic Devices Policy",          FieldId.ELECTRONIC_DEVICES,    False),
        ("AI Guidance",                        FieldId.AI_GUIDANCE,           False),
    ):
        if t(fid):
            _section(blocks, heading, t(fid), per_line=per_line)

    return blocks
