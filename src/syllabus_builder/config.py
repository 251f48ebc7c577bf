"""
config.py — Central settings for the Syllabus Builder
=====================================================
All configuration is loaded from environment variables / .env file.
Copy .env.example → .env to override the defaults.

Only presentation concerns live here (institution branding, page
geometry, fonts, log level).  Nothing in the form data depends on it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load .env into os.environ (no-op if already set, safe to call multiple times)
load_dotenv(override=False)


# ─── Helpers ────────────────────────────────────────────────────────────────

def _is_placeholder(value: str) -> bool:
    """Return True if the value looks like an unfilled template placeholder."""
    return not value or "<" in value or value.startswith("your-") or value == "PLACEHOLDER"


# ─── Institution branding ────────────────────────────────────────────────────

@dataclass(frozen=True)
class InstitutionConfig:
    name:          str   # subtitle under the course title
    short_name:    str   # prefix of the "… Code of Conduct" heading
    accent_colour: str   # hex, used for PDF / preview headings

    @property
    def is_configured(self) -> bool:
        return bool(self.name) and not _is_placeholder(self.name)

    @property
    def code_of_conduct_heading(self) -> str:
        if self.short_name and not _is_placeholder(self.short_name):
            return f"{self.short_name} Code of Conduct"
        return "Code of Conduct"


# ─── PDF layout ──────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PdfConfig:
    margin_mm:         float
    body_font_size:    float
    heading_font_size: float
    title_font_size:   float
    font_path:         str = ""   # TTF for non-Latin text; empty → built-in Helvetica
    bold_font_path:    str = ""   # optional bold companion of font_path


# ─── Word document ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DocxConfig:
    font_name: str
    font_size: float


# ─── App-level settings ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class AppConfig:
    log_level:   str
    draft_label: str   # used in the save filename when no course number is set


# ─── Master settings object ──────────────────────────────────────────────────

@dataclass(frozen=True)
class Settings:
    institution: InstitutionConfig
    pdf:         PdfConfig
    docx:        DocxConfig
    app:         AppConfig

    def status_summary(self) -> dict[str, str]:
        """Return a dict of setting → value for the sidebar footer."""
        return {
            "Institution": self.institution.name if self.institution.is_configured else "⚪ Not configured",
            "PDF margin":  f"{self.pdf.margin_mm:g} mm",
            "Word font":   f"{self.docx.font_name} {self.docx.font_size:g} pt",
            "Log level":   self.app.log_level,
        }


def get_settings() -> Settings:
    """Load all configuration from environment variables."""
    _str   = lambda k, d="": os.getenv(k, d).strip()
    _float = lambda k, d=0.0: float(os.getenv(k, str(d)) or d)

    return Settings(
        institution=InstitutionConfig(
            name          = _str("INSTITUTION_NAME", "NYU Stern School of Business"),
            short_name    = _str("INSTITUTION_SHORT_NAME", "Stern"),
            accent_colour = _str("ACCENT_COLOUR", "#57068C"),
        ),
        pdf=PdfConfig(
            margin_mm         = _float("PDF_MARGIN_MM", 20.0),
            body_font_size    = _float("PDF_BODY_FONT_SIZE", 11.0),
            heading_font_size = _float("PDF_HEADING_FONT_SIZE", 14.0),
            title_font_size   = _float("PDF_TITLE_FONT_SIZE", 18.0),
            font_path         = _str("PDF_FONT_PATH"),
            bold_font_path    = _str("PDF_BOLD_FONT_PATH"),
        ),
        docx=DocxConfig(
            font_name = _str("DOCX_FONT_NAME", "Calibri"),
            font_size = _float("DOCX_FONT_SIZE", 11.0),
        ),
        app=AppConfig(
            log_level   = _str("LOG_LEVEL", "INFO").upper(),
            draft_label = _str("DRAFT_LABEL", "draft") or "draft",
        ),
    )
