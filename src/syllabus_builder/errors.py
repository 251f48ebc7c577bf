"""
errors.py — Error taxonomy for the Syllabus Builder
===================================================
Every user-facing failure is one of these.  The Streamlit app catches
them at the action boundary (button click / file upload) and shows a
blocking ``st.error`` message; the in-memory FormState is never touched
by a failed action.

  ValidationError     required content missing before export
  InvariantViolation  removing the last module / last class day
  ParseError          malformed draft JSON on load
  ExportError         DOCX / PDF renderer failure
  NotFoundError       unknown module handle or class-day index
"""

from __future__ import annotations


class SyllabusError(Exception):
    """Base class for all Syllabus Builder errors."""


class ValidationError(SyllabusError):
    """Raised by the export gate.  Lists every problem at once, never just the first."""

    def __init__(self, missing_fields: list[str], problems: list[str] | None = None):
        self.missing_fields = list(missing_fields)
        self.problems       = list(problems or [])
        super().__init__(self.user_message())

    def user_message(self) -> str:
        parts: list[str] = []
        if self.missing_fields:
            parts.append(
                "Please fill in all required fields: " + ", ".join(self.missing_fields)
            )
        parts.extend(self.problems)
        return "\n".join(parts)


class InvariantViolation(SyllabusError):
    """An outline edit would leave a module list or class-day list empty."""


class ParseError(SyllabusError):
    """A saved draft could not be read."""


class ExportError(SyllabusError):
    """The document or PDF renderer failed."""


class NotFoundError(SyllabusError):
    """A module handle or class-day index does not exist in the outline."""
