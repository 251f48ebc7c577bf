"""
exporter.py — One entry point per download button
=================================================
  export_syllabus(state, fmt)  → ExportArtifact(filename, data, mime)
  preview_html(state)          → str  (live preview; export gate skipped)

Every export works on its own FormState snapshot taken at invocation,
so two overlapping exports never see each other's data.  Validation
failures propagate as ValidationError; any renderer failure is logged and
re-raised as ExportError.  Nothing here writes files: the UI hands the
artifact to ``st.download_button``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from syllabus_builder.assembler import assemble
from syllabus_builder.config import Settings, get_settings
from syllabus_builder.errors import ExportError
from syllabus_builder.fields import FieldId
from syllabus_builder.form_state import FormState
from syllabus_builder.renderers import DocxRenderer, HtmlRenderer, PdfRenderer

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    DOCX = "docx"
    PDF  = "pdf"


MIME_TYPES: dict[ExportFormat, str] = {
    ExportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ExportFormat.PDF:  "application/pdf",
}


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    data:     bytes
    mime:     str


def export_filename(state: FormState, fmt: ExportFormat | str) -> str:
    """``{courseNumber}_Syllabus.{docx|pdf}``"""
    fmt = ExportFormat(fmt)
    return f"{state.text(FieldId.COURSE_NUMBER)}_Syllabus.{fmt.value}"


def export_syllabus(
    state: FormState,
    fmt: ExportFormat | str,
    settings: Optional[Settings] = None,
) -> ExportArtifact:
    """
    Assemble and render *state* as a Word document or PDF.

    Raises
    ------
    ValidationError  required content missing (nothing is rendered)
    ExportError      the renderer failed
    """
    fmt      = ExportFormat(fmt)
    settings = settings or get_settings()
    snapshot = state.snapshot()

    blocks = assemble(snapshot, settings)
    renderer = DocxRenderer(settings) if fmt == ExportFormat.DOCX else PdfRenderer(settings)
    try:
        data = renderer.render(blocks)
    except Exception as exc:
        logger.exception("%s export failed", fmt.value.upper())
        label = "Word document" if fmt == ExportFormat.DOCX else "PDF"
        raise ExportError(f"Error creating {label}. Please try again.") from exc

    filename = export_filename(snapshot, fmt)
    logger.info("Exported %s (%d blocks, %d bytes)", filename, len(blocks), len(data))
    return ExportArtifact(filename=filename, data=data, mime=MIME_TYPES[fmt])


def preview_html(state: FormState, settings: Optional[Settings] = None) -> str:
    settings = settings or get_settings()
    blocks = assemble(state.snapshot(), settings, validate=False)
    return HtmlRenderer(settings).render(blocks)
