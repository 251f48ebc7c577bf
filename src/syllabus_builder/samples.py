"""
samples.py — "Load Sample" data
===============================
A fully filled-in syllabus so a first-time user can see every section of
the export before typing anything.  Choice fields use option codes, the
same way the form stores them.
"""

from __future__ import annotations

from syllabus_builder.fields import FieldId
from syllabus_builder.form_state import FormState
from syllabus_builder.outline import ClassDay, Module, OutlineModel

SAMPLE_VALUES: dict[FieldId, str] = {
    FieldId.COURSE_TITLE:   "Data-Driven Marketing Strategy",
    FieldId.COURSE_NUMBER:  "MKTG-GB.2350.01",
    FieldId.TERM:           "Fall 2025",
    FieldId.CREDITS:        "3",
    FieldId.PREREQUISITES:  "Core Marketing or equivalent",
    FieldId.INSTRUCTOR_NAME: "Dr. Alex Rivera",
    FieldId.OFFICE_HOURS:   "Wednesdays 2:00-4:00 PM, Room 8-12, or by appointment",
    FieldId.CLASS_SCHEDULE: "TR 10:30-11:50 AM, Room 3-50",
    FieldId.COURSE_DESCRIPTION: (
        "This course covers how firms use customer data to segment markets, "
        "position products and measure marketing performance. Sessions mix "
        "frameworks, case discussion and hands-on spreadsheet analysis."
    ),
    FieldId.LEARNING_OUTCOMES: (
        "At the end of this course, students will be able to:\n"
        "- Segment a market using customer-level data\n"
        "- Build and defend a positioning statement\n"
        "\n"
        "- Design an experiment to measure campaign lift"
    ),
    FieldId.COMMUNICATION_STRATEGY: (
        "Email is the best way to reach me; I reply within one business day."
    ),
    FieldId.TECHNICAL_REQUIREMENTS: (
        "Students will need:\n"
        "- Access to the course site for materials and submissions\n"
        "- A spreadsheet application"
    ),
    FieldId.ASSIGNMENT_TYPES: (
        "1. Case write-ups (individual), two pages each\n"
        "2. Team project: data-driven marketing plan\n"
        "3. Final exam"
    ),
    FieldId.GRADING_PERCENTAGES: (
        "Case write-ups: 30%\n"
        "Team project: 35%\n"
        "Final exam: 25%\n"
        "Participation: 10%"
    ),
    FieldId.DUE_DATES_POLICY: (
        "Assignments are due at 11:59 PM on the listed date. Late work loses "
        "10% per day unless an extension was agreed in advance."
    ),
    FieldId.ACADEMIC_INTEGRITY: "standard",
    FieldId.INTEGRITY_OF_CREDIT: (
        "The class meets twice a week for 1 hour 20 minutes over 15 weeks, "
        "totalling 40 contact hours for this 3-credit course."
    ),
    FieldId.GRADING_GUIDELINES:    "core",
    FieldId.STUDENT_WELLNESS:      "comprehensive",
    FieldId.RELIGIOUS_OBSERVANCES: "accommodating",
    FieldId.ELECTRONIC_DEVICES:    "laptops_allowed",
    FieldId.AI_GUIDANCE:           "limited",
}


def sample_outline() -> OutlineModel:
    return OutlineModel([
        Module(
            title="Module 1: Foundations",
            description="Why data changes marketing decisions.",
            class_days=[
                ClassDay("Class 1: Course Introduction",
                         "Readings: Syllabus\nActivity: Team formation"),
                ClassDay("Class 2: Customer Data Sources",
                         "Readings: Chapter 1\nAssignment: Case 1 assigned"),
            ],
        ),
        Module(
            title="Module 2: Segmentation and Positioning",
            class_days=[
                ClassDay("Class 3: Cluster-Based Segmentation",
                         "Readings: Chapter 3\nActivity: Spreadsheet lab"),
                ClassDay("Class 4: Positioning Maps",
                         "Readings: Chapter 4\nAssignment: Case 1 due"),
            ],
        ),
    ])


def sample_form_state() -> FormState:
    state = FormState.empty()
    for fid, value in SAMPLE_VALUES.items():
        state.set(fid, value)
    state.outline = sample_outline()
    return state
