"""
Field registry for the Syllabus Builder.

Static declaration of every form field (identifier, label, kind, choice
options, pre-filled text) and of every form section tracked by the
sidebar table of contents.  Fixed at import time; nothing here mutates.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


# ─── Enumerations ────────────────────────────────────────────────────────────

class FieldId(str, Enum):
    """Every recognised form field.  Values are the keys used in saved drafts."""
    COURSE_TITLE           = "courseTitle"
    COURSE_NUMBER          = "courseNumber"
    TERM                   = "term"
    CREDITS                = "credits"
    PREREQUISITES          = "prerequisites"
    INSTRUCTOR_NAME        = "instructorName"
    OFFICE_HOURS           = "officeHours"
    CLASS_SCHEDULE         = "classSchedule"
    COURSE_DESCRIPTION     = "courseDescription"
    LEARNING_OUTCOMES      = "learningOutcomes"
    COMMUNICATION_STRATEGY = "communicationStrategy"
    TECHNICAL_REQUIREMENTS = "technicalRequirements"
    ASSIGNMENT_TYPES       = "assignmentTypes"
    GRADING_PERCENTAGES    = "gradingPercentages"
    DUE_DATES_POLICY       = "dueDatesPolicy"
    ACADEMIC_INTEGRITY     = "academicIntegrity"
    CODE_OF_CONDUCT        = "codeOfConduct"
    INTEGRITY_OF_CREDIT    = "integrityOfCredit"
    GENERAL_CONDUCT        = "generalConduct"
    GRADING_GUIDELINES     = "gradingGuidelines"
    STUDENT_ACCESSIBILITY  = "studentAccessibility"
    STUDENT_WELLNESS       = "studentWellness"
    NAME_PRONOUNS          = "namePronouns"
    RELIGIOUS_OBSERVANCES  = "religiousObservances"
    ELECTRONIC_DEVICES     = "electronicDevices"
    AI_GUIDANCE            = "aiGuidance"


class FieldKind(str, Enum):
    TEXT     = "text"      # single-line input
    TEXTAREA = "textarea"  # multi-line input
    CHOICE   = "choice"    # single-choice dropdown; stores an option code
    CHECKBOX = "checkbox"  # boolean


class SectionValidator(str, Enum):
    """Custom section checks, evaluated by completion.py against a FormState."""
    OUTLINE_HAS_COMPLETE_DAY = "outline_has_complete_day"


# ─── Field / section descriptors ─────────────────────────────────────────────

@dataclass(frozen=True)
class ChoiceOption:
    value: str   # stored code
    title: str   # short name shown in the dropdown
    text:  str   # policy wording

    @property
    def label(self) -> str:
        """Human-readable text emitted into exported documents."""
        return f"{self.title}: {self.text}"


@dataclass(frozen=True)
class FieldSpec:
    id:       FieldId
    label:    str
    kind:     FieldKind = FieldKind.TEXT
    options:  tuple[ChoiceOption, ...] = ()
    default:  str = ""
    readonly: bool = False
    help:     str = ""


@dataclass(frozen=True)
class Section:
    id:              str
    title:           str
    required_fields: tuple[FieldId, ...] = ()
    optional_fields: tuple[FieldId, ...] = ()
    validator:       Optional[SectionValidator] = None


# ─── Choice option lists ─────────────────────────────────────────────────────

CHOICE_OPTIONS: dict[FieldId, tuple[ChoiceOption, ...]] = {
    FieldId.ACADEMIC_INTEGRITY: (
        ChoiceOption(
            "standard", "Standard Policy",
            "Academic integrity is fundamental to the educational process. All members "
            "of the community are expected to act with the highest level of academic "
            "honesty. Violations may result in failure of the assignment or the course, "
            "suspension, or expulsion.",
        ),
        ChoiceOption(
            "collaborative", "Collaborative Work Policy",
            "Collaboration is encouraged on designated group work. All individually "
            "submitted work must be your own, and every outside source or collaborator "
            "must be acknowledged.",
        ),
    ),
    FieldId.GRADING_GUIDELINES: (
        ChoiceOption(
            "core", "Core Course Guideline",
            "For core courses with more than 25 students, approximately 35% of students "
            "will receive an \"A\" or \"A-\" grade.",
        ),
        ChoiceOption(
            "elective", "Elective Course Guideline",
            "For elective courses, approximately 50% of students will receive an \"A\" "
            "or \"A-\" grade.",
        ),
        ChoiceOption(
            "pass_fail", "Pass / Fail",
            "This course is graded on a pass/fail basis according to the criteria "
            "listed under Course Requirements.",
        ),
    ),
    FieldId.STUDENT_WELLNESS: (
        ChoiceOption(
            "comprehensive", "Comprehensive Support",
            "The university provides counseling, health services and academic support. "
            "Students are encouraged to seek help when needed and to prioritize their "
            "mental and physical health.",
        ),
        ChoiceOption(
            "brief", "Brief Statement",
            "If you are struggling, please reach out to the instructor or to the "
            "student wellness center.",
        ),
    ),
    FieldId.RELIGIOUS_OBSERVANCES: (
        ChoiceOption(
            "accommodating", "Accommodating Policy",
            "Students should notify the instructor in advance of religious observances "
            "that may affect attendance or due dates. Reasonable accommodations will be "
            "made.",
        ),
        ChoiceOption(
            "university", "University Policy Reference",
            "Absences for religious observance follow the university calendar policy on "
            "religious holidays.",
        ),
    ),
    FieldId.ELECTRONIC_DEVICES: (
        ChoiceOption(
            "laptops_allowed", "Laptops Allowed",
            "Laptops and tablets are permitted for note-taking and course-related "
            "activities. Please use devices respectfully.",
        ),
        ChoiceOption(
            "no_devices", "No Devices",
            "Laptops, tablets and phones must be put away during class unless the "
            "instructor asks otherwise.",
        ),
    ),
    FieldId.AI_GUIDANCE: (
        ChoiceOption(
            "prohibited", "AI Prohibited",
            "Generative AI tools may not be used for any graded work in this course.",
        ),
        ChoiceOption(
            "limited", "Limited AI Use",
            "AI tools may be used for brainstorming and initial research only. All final "
            "work must be original, and any AI assistance must be disclosed and cited.",
        ),
        ChoiceOption(
            "encouraged", "AI Encouraged",
            "AI tools are encouraged as learning aids. You remain responsible for the "
            "accuracy of everything you submit and must describe how you used them.",
        ),
    ),
}


# ─── Pre-filled institutional text ───────────────────────────────────────────

_CODE_OF_CONDUCT = (
    "All students are expected to follow the school's Code of Conduct.\n"
    "\n"
    "This includes treating classmates, faculty and staff with respect, "
    "contributing to a positive learning environment, and upholding the "
    "standards of the profession."
)

_GENERAL_CONDUCT = (
    "Arrive on time and stay for the full session.\n"
    "Come prepared, having completed the assigned readings.\n"
    "Engage respectfully with differing viewpoints."
)

_STUDENT_ACCESSIBILITY = (
    "If you will require academic accommodation of any kind during this course, "
    "you must notify the instructor and contact the Moses Center for Student "
    "Accessibility early in the semester."
)

_NAME_PRONOUNS = (
    "Please let the instructor know how to pronounce your name and which "
    "pronouns you use, if you wish. Your preferences will be respected in class."
)


# ─── Field registry ──────────────────────────────────────────────────────────

FIELD_REGISTRY: dict[FieldId, FieldSpec] = {
    spec.id: spec
    for spec in (
        FieldSpec(FieldId.COURSE_TITLE,   "Course Title"),
        FieldSpec(FieldId.COURSE_NUMBER,  "Course Number / Section"),
        FieldSpec(FieldId.TERM,           "Term"),
        FieldSpec(FieldId.CREDITS,        "Credits"),
        FieldSpec(FieldId.PREREQUISITES,  "Prerequisites",
                  help="Optional; left out of the export when blank."),
        FieldSpec(FieldId.INSTRUCTOR_NAME, "Instructor Name"),
        FieldSpec(FieldId.OFFICE_HOURS,   "Office Hours"),
        FieldSpec(FieldId.CLASS_SCHEDULE, "Class Schedule"),
        FieldSpec(FieldId.COURSE_DESCRIPTION,     "Course Description",     FieldKind.TEXTAREA),
        FieldSpec(FieldId.LEARNING_OUTCOMES,      "Learning Outcomes",      FieldKind.TEXTAREA,
                  help="One outcome per line."),
        FieldSpec(FieldId.COMMUNICATION_STRATEGY, "Communication Strategy", FieldKind.TEXTAREA),
        FieldSpec(FieldId.TECHNICAL_REQUIREMENTS, "Technical Requirements", FieldKind.TEXTAREA),
        FieldSpec(FieldId.ASSIGNMENT_TYPES,    "Assignment Types and Descriptions", FieldKind.TEXTAREA),
        FieldSpec(FieldId.GRADING_PERCENTAGES, "Grading Percentages",              FieldKind.TEXTAREA),
        FieldSpec(FieldId.DUE_DATES_POLICY,    "Due Dates and Late Policy",        FieldKind.TEXTAREA),
        FieldSpec(FieldId.ACADEMIC_INTEGRITY, "Academic Integrity", FieldKind.CHOICE,
                  options=CHOICE_OPTIONS[FieldId.ACADEMIC_INTEGRITY]),
        FieldSpec(FieldId.CODE_OF_CONDUCT, "Code of Conduct", FieldKind.TEXTAREA,
                  default=_CODE_OF_CONDUCT, readonly=True),
        FieldSpec(FieldId.INTEGRITY_OF_CREDIT, "Integrity of Credit", FieldKind.TEXTAREA,
                  help="Contact hours per week × weeks for the credit value."),
        FieldSpec(FieldId.GENERAL_CONDUCT, "General Conduct & Behavior", FieldKind.TEXTAREA,
                  default=_GENERAL_CONDUCT),
        FieldSpec(FieldId.GRADING_GUIDELINES, "Grading Guidelines", FieldKind.CHOICE,
                  options=CHOICE_OPTIONS[FieldId.GRADING_GUIDELINES]),
        FieldSpec(FieldId.STUDENT_ACCESSIBILITY, "Student Accessibility", FieldKind.TEXTAREA,
                  default=_STUDENT_ACCESSIBILITY, readonly=True),
        FieldSpec(FieldId.STUDENT_WELLNESS, "Student Wellness", FieldKind.CHOICE,
                  options=CHOICE_OPTIONS[FieldId.STUDENT_WELLNESS]),
        FieldSpec(FieldId.NAME_PRONOUNS, "Name Pronunciation and Pronouns", FieldKind.TEXTAREA,
                  default=_NAME_PRONOUNS, readonly=True),
        FieldSpec(FieldId.RELIGIOUS_OBSERVANCES, "Religious Observances and Absences",
                  FieldKind.CHOICE, options=CHOICE_OPTIONS[FieldId.RELIGIOUS_OBSERVANCES]),
        FieldSpec(FieldId.ELECTRONIC_DEVICES, "Electronic Devices Policy", FieldKind.CHOICE,
                  options=CHOICE_OPTIONS[FieldId.ELECTRONIC_DEVICES]),
        FieldSpec(FieldId.AI_GUIDANCE, "AI Guidance", FieldKind.CHOICE,
                  options=CHOICE_OPTIONS[FieldId.AI_GUIDANCE]),
    )
}


# ─── Section registry (sidebar table of contents order) ─────────────────────

SECTIONS: tuple[Section, ...] = (
    Section("basic-info", "Basic Course Information", required_fields=(
        FieldId.COURSE_TITLE, FieldId.COURSE_NUMBER, FieldId.TERM, FieldId.CREDITS,
        FieldId.INSTRUCTOR_NAME, FieldId.OFFICE_HOURS, FieldId.CLASS_SCHEDULE,
    )),
    Section("description",       "Course Description",     required_fields=(FieldId.COURSE_DESCRIPTION,)),
    Section("learning-outcomes", "Learning Outcomes",      required_fields=(FieldId.LEARNING_OUTCOMES,)),
    Section("communication",     "Communication Strategy", optional_fields=(FieldId.COMMUNICATION_STRATEGY,)),
    Section("technical",         "Technical Requirements", optional_fields=(FieldId.TECHNICAL_REQUIREMENTS,)),
    Section("requirements", "Course Requirements and Assignments", required_fields=(
        FieldId.ASSIGNMENT_TYPES, FieldId.GRADING_PERCENTAGES, FieldId.DUE_DATES_POLICY,
    )),
    Section("outline", "Course Outline", validator=SectionValidator.OUTLINE_HAS_COMPLETE_DAY),
    Section("integrity",        "Academic Integrity",    required_fields=(FieldId.ACADEMIC_INTEGRITY,)),
    Section("code-of-conduct",  "Code of Conduct",       required_fields=(FieldId.CODE_OF_CONDUCT,)),
    Section("integrity-credit", "Integrity of Credit",   required_fields=(FieldId.INTEGRITY_OF_CREDIT,)),
    Section("conduct",          "General Conduct",       required_fields=(FieldId.GENERAL_CONDUCT,)),
    Section("grading",          "Grading Guidelines",    required_fields=(FieldId.GRADING_GUIDELINES,)),
    Section("accessibility",    "Student Accessibility", required_fields=(FieldId.STUDENT_ACCESSIBILITY,)),
    Section("wellness",         "Student Wellness",      optional_fields=(FieldId.STUDENT_WELLNESS,)),
    # Pre-filled, so always complete unless the text is cleared
    Section("pronouns",         "Name / Pronouns",       required_fields=(FieldId.NAME_PRONOUNS,)),
    Section("religious",        "Religious Observances", optional_fields=(FieldId.RELIGIOUS_OBSERVANCES,)),
    Section("devices",          "Electronic Devices",    optional_fields=(FieldId.ELECTRONIC_DEVICES,)),
    Section("ai",               "AI Guidance",           optional_fields=(FieldId.AI_GUIDANCE,)),
)

CHOICE_FIELDS: tuple[FieldId, ...] = tuple(
    fid for fid, spec in FIELD_REGISTRY.items() if spec.kind == FieldKind.CHOICE
)


def all_sections() -> tuple[Section, ...]:
    return SECTIONS


def all_fields() -> tuple[FieldSpec, ...]:
    return tuple(FIELD_REGISTRY.values())


def field_spec(field_id: FieldId | str) -> FieldSpec:
    """Return the descriptor for *field_id*; raises ValueError for unknown ids."""
    return FIELD_REGISTRY[FieldId(field_id)]


def section_by_id(section_id: str) -> Optional[Section]:
    return next((s for s in SECTIONS if s.id == section_id), None)


_CAPITAL = re.compile(r"([A-Z])")


def humanize_field_id(field_id: FieldId | str) -> str:
    """``courseTitle`` → ``Course Title`` (split on capitals, capitalise the first letter)."""
    raw = field_id.value if isinstance(field_id, FieldId) else str(field_id)
    spaced = _CAPITAL.sub(r" \1", raw)
    return spaced[:1].upper() + spaced[1:]


def resolve_choice_label(field_id: FieldId | str, value: str) -> str:
    """
    Map a stored option code to its display label.

    Values that are not a known code (free text from older drafts, or a
    non-choice field) come back unchanged.
    """
    spec = field_spec(field_id)
    if spec.kind != FieldKind.CHOICE or not value:
        return value
    option = next((o for o in spec.options if o.value == value), None)
    return option.label if option else value
