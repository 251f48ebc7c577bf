"""
Tests for document assembly and the export gate (assembler.py).
"""
import pytest
from factories import make_outline, make_state

from syllabus_builder.assembler import (
    NO_CLASS_DAY_MESSAGE,
    NO_MODULES_MESSAGE,
    Heading,
    Paragraph,
    Table,
    assemble,
    check_export_ready,
    resolve_choices,
)
from syllabus_builder.errors import ValidationError
from syllabus_builder.fields import FIELD_REGISTRY, FieldId
from syllabus_builder.outline import Module, OutlineModel


def _headings(blocks, level=1):
    return [b.text for b in blocks if isinstance(b, Heading) and b.level == level]


def _paragraphs(blocks):
    return [b.text for b in blocks if isinstance(b, Paragraph)]


# ─── Export gate ────────────────────────────────────────────────────────────

class TestExportGate:
    def test_ready_state_passes(self, ready_state):
        assert check_export_ready(ready_state) is None

    def test_only_title_missing(self):
        state = make_state(courseTitle="")
        with pytest.raises(ValidationError) as exc_info:
            assemble(state)
        assert exc_info.value.missing_fields == ["Course Title"]
        assert "Please fill in all required fields: Course Title" in exc_info.value.user_message()

    def test_lists_every_missing_field(self, empty_state):
        error = check_export_ready(empty_state)
        assert error is not None
        assert len(error.missing_fields) == 15
        assert error.missing_fields[0] == "Course Title"

    def test_whitespace_counts_as_missing(self):
        error = check_export_ready(make_state(term="   "))
        assert error.missing_fields == ["Term"]

    def test_optional_fields_not_required(self):
        assert check_export_ready(make_state(prerequisites="", aiGuidance="")) is None

    def test_no_modules(self):
        error = check_export_ready(make_state(outline=OutlineModel([])))
        assert error.problems == [NO_MODULES_MESSAGE]

    def test_modules_without_class_days(self):
        error = check_export_ready(make_state(outline=OutlineModel([Module(title="W1")])))
        assert error.problems == [NO_CLASS_DAY_MESSAGE]

    def test_incomplete_day_still_passes_gate(self):
        state = make_state(outline=make_outline(("Week 1", [("", "")])))
        assert check_export_ready(state) is None

    def test_fields_and_outline_reported_together(self):
        state = make_state(outline=OutlineModel([]), credits="")
        error = check_export_ready(state)
        assert error.missing_fields == ["Credits"]
        assert NO_MODULES_MESSAGE in error.user_message()


# ─── Choice resolution ──────────────────────────────────────────────────────

class TestResolveChoices:
    def test_codes_become_labels(self, ready_state):
        resolved = resolve_choices(ready_state)
        option = FIELD_REGISTRY[FieldId.ACADEMIC_INTEGRITY].options[0]
        assert resolved.text(FieldId.ACADEMIC_INTEGRITY) == option.label.strip()

    def test_original_untouched(self, ready_state):
        resolve_choices(ready_state)
        assert ready_state.get(FieldId.ACADEMIC_INTEGRITY) == "standard"


# ─── Block sequence ─────────────────────────────────────────────────────────

class TestAssemble:
    def test_title_first(self, ready_state, settings):
        blocks = assemble(ready_state, settings)
        assert blocks[0] == Heading("Intro to Testing", 0)
        assert blocks[1] == Paragraph("NYU Stern School of Business")

    def test_unbranded_has_no_subtitle(self, ready_state, unbranded_settings):
        blocks = assemble(ready_state, unbranded_settings)
        assert blocks[1] == Paragraph("Course Number / Section: CS-101")
        assert "Code of Conduct" in _headings(blocks)

    def test_mandatory_heading_order(self, ready_state, settings):
        assert _headings(assemble(ready_state, settings)) == [
            "Course Description",
            "Learning Outcomes",
            "Course Requirements and Assignments",
            "Course Outline",
            "Academic Integrity",
            "Stern Code of Conduct",
            "Integrity of Credit",
            "General Conduct & Behavior",
            "Grading Guidelines",
            "Student Accessibility",
            "Name Pronunciation and Pronouns",
        ]

    def test_optional_sections_in_order(self, settings):
        state = make_state(
            communicationStrategy="Email",
            technicalRequirements="Laptop",
            studentWellness="brief",
            religiousObservances="university",
            electronicDevices="no_devices",
            aiGuidance="prohibited",
        )
        headings = _headings(assemble(state, settings))
        assert headings.index("Learning Outcomes") < headings.index("Communication Strategy")
        assert headings.index("Communication Strategy") < headings.index("Technical Requirements")
        assert headings.index("Technical Requirements") < headings.index("Course Requirements and Assignments")
        assert headings[-5:] == [
            "Student Wellness",
            "Name Pronunciation and Pronouns",
            "Religious Observances and Absences",
            "Electronic Devices Policy",
            "AI Guidance",
        ]

    def test_blank_optional_section_omitted(self, ready_state, settings):
        headings = _headings(assemble(ready_state, settings))
        assert "Communication Strategy" not in headings
        assert "AI Guidance" not in headings

    def test_prerequisites_line_only_when_present(self, settings):
        without = _paragraphs(assemble(make_state(), settings))
        with_pre = _paragraphs(assemble(make_state(prerequisites="CS-100"), settings))
        assert not any(p.startswith("Prerequisites") for p in without)
        assert "Prerequisites: CS-100" in with_pre

    def test_requirements_sub_blocks(self, ready_state, settings):
        assert _headings(assemble(ready_state, settings), level=2)[:3] == [
            "Assignment Types and Descriptions:",
            "Grading Percentages:",
            "Due Dates and Late Policy:",
        ]

    def test_learning_outcomes_one_paragraph_per_line(self, settings):
        blocks = assemble(make_state(learningOutcomes="One\n\nTwo"), settings)
        i = blocks.index(Heading("Learning Outcomes", 1))
        assert blocks[i + 1:i + 4] == [Paragraph("One"), Paragraph(" "), Paragraph("Two")]

    def test_description_single_paragraph(self, settings):
        blocks = assemble(make_state(courseDescription="Line 1\nLine 2"), settings)
        i = blocks.index(Heading("Course Description", 1))
        assert blocks[i + 1] == Paragraph("Line 1\nLine 2")

    def test_choice_label_in_output(self, ready_state, settings):
        option = FIELD_REGISTRY[FieldId.GRADING_GUIDELINES].options[0]
        assert option.label.strip() in _paragraphs(assemble(ready_state, settings))

    def test_unknown_choice_value_passes_through(self, settings):
        blocks = assemble(make_state(academicIntegrity="Our own policy"), settings)
        assert "Our own policy" in _paragraphs(blocks)

    def test_outline_blocks(self, settings, two_module_outline):
        blocks = assemble(make_state(outline=two_module_outline), settings)
        tables = [b for b in blocks if isinstance(b, Table)]
        assert len(tables) == 2
        assert tables[0].header == ("Class Day & Title", "Readings, Assignments, and Activities")
        assert tables[0].rows == (("Intro", "Read Ch.1\nDiscuss"), ("Lab", "Set up tools"))
        assert "Week 1" in _headings(blocks, level=2)

    def test_incomplete_days_not_exported(self, settings):
        outline = make_outline(("Week 1", [("Intro", "Read"), ("Draft", "")]))
        tables = [b for b in assemble(make_state(outline=outline), settings) if isinstance(b, Table)]
        assert tables[0].rows == (("Intro", "Read"),)

    def test_idempotent(self, sample_state, settings):
        assert assemble(sample_state, settings) == assemble(sample_state, settings)

    def test_state_not_modified(self, ready_state, settings):
        before = ready_state.snapshot()
        assemble(ready_state, settings)
        assert ready_state == before

    def test_preview_mode_skips_gate(self, empty_state, settings):
        blocks = assemble(empty_state, settings, validate=False)
        assert blocks[0] == Heading("", 0)

    def test_table_plain_text(self):
        table = Table(header=("a", "b"), rows=(("A", "x"), ("B", "y")))
        assert table.as_plain_text() == "A\nx\n\nB\ny\n"
