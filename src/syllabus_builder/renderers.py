"""
renderers.py – ContentBlock consumers
=====================================
Three independent renderers share one narrow interface,
``render(blocks)``, and therefore one heading order:

  DocxRenderer  → .docx bytes (python-docx)
                  Heading → styled heading, Paragraph → one paragraph,
                  Table → two-column grid with a bold header row.
  PdfRenderer   → .pdf bytes (reportlab canvas)
                  Manual layout: a running y-cursor, text wrapped to the
                  content width at the current font size, a new page
                  whenever the next line would cross the bottom margin.
                  Tables are flattened to the outline's plain-text form.
  HtmlRenderer  → full HTML document for the in-app live preview.

``render_docx`` / ``render_pdf`` / ``render_html`` are shortcuts.
"""

from __future__ import annotations

import html
import io
import re
from typing import Iterable, Optional

from syllabus_builder.assembler import ContentBlock, Heading, Paragraph, Table
from syllabus_builder.config import Settings, get_settings

# Characters XML 1.0 cannot carry; lxml rejects them inside a .docx
_XML_ILLEGAL = re.compile("[^\x09\x0A\x0D\x20-\uD7FF\uE000-\uFFFD\U00010000-\U0010FFFF]")


def xml_safe(text: str) -> str:
    return _XML_ILLEGAL.sub("", text)


def _rl_colour(hex_str: str):
    """Convert a CSS hex colour string to a reportlab Color."""
    from reportlab.lib import colors as rl_colors
    h = hex_str.lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    r, g, b = int(h[0:2], 16) / 255, int(h[2:4], 16) / 255, int(h[4:6], 16) / 255
    return rl_colors.Color(r, g, b)


# ─── Word document ───────────────────────────────────────────────────────────

class DocxRenderer:
    """Blocks → .docx bytes."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def render(self, blocks: Iterable[ContentBlock]) -> bytes:
        from docx import Document
        from docx.enum.text import WD_ALIGN_PARAGRAPH
        from docx.shared import Pt

        doc = Document()
        normal = doc.styles["Normal"]
        normal.font.name = self.settings.docx.font_name
        normal.font.size = Pt(self.settings.docx.font_size)

        for block in blocks:
            if isinstance(block, Heading):
                h = doc.add_heading(xml_safe(block.text), level=min(block.level, 9))
                if block.level == 0:
                    h.alignment = WD_ALIGN_PARAGRAPH.CENTER
            elif isinstance(block, Paragraph):
                # An empty paragraph would collapse; a space keeps the gap visible
                doc.add_paragraph(xml_safe(block.text) or " ")
            elif isinstance(block, Table):
                table = doc.add_table(rows=1, cols=len(block.header))
                table.style = "Table Grid"
                for cell, text in zip(table.rows[0].cells, block.header):
                    cell.paragraphs[0].add_run(xml_safe(text)).bold = True
                for row in block.rows:
                    cells = table.add_row().cells
                    for i, (cell, text) in enumerate(zip(cells, row)):
                        run = cell.paragraphs[0].add_run(xml_safe(text))
                        run.bold = i == 0
                doc.add_paragraph(" ")
            else:
                raise TypeError(f"Unsupported content block: {block!r}")

        buf = io.BytesIO()
        doc.save(buf)
        return buf.getvalue()


# ─── PDF ─────────────────────────────────────────────────────────────────────

LINE_FACTOR = 1.35   # line height as a multiple of the font size


def wrap_line(text: str, font: str, size: float, width: float) -> list[str]:
    """
    Wrap one line of text to *width* points.

    Breaks at spaces first; a token wider than *width* on its own (a long
    URL, an e-mail address) is then cut into character chunks that fit.
    """
    from reportlab.lib.utils import simpleSplit
    from reportlab.pdfbase.pdfmetrics import stringWidth

    lines: list[str] = []
    for line in simpleSplit(text, font, size, width) or [""]:
        if stringWidth(line, font, size) <= width:
            lines.append(line)
            continue
        chunk = ""
        for ch in line:
            if chunk and stringWidth(chunk + ch, font, size) > width:
                lines.append(chunk)
                chunk = ""
            chunk += ch
        lines.append(chunk)
    return lines


class PdfRenderer:
    """
    Blocks → .pdf bytes, laid out by hand on a reportlab canvas.

    ``page_count`` holds the number of pages of the last render.  The
    built-in Helvetica only covers Latin text; set ``PDF_FONT_PATH`` to a
    TrueType font for other scripts.
    """

    BODY_FONT = "Helvetica"
    BOLD_FONT = "Helvetica-Bold"

    def __init__(self, settings: Optional[Settings] = None):
        self.settings   = settings or get_settings()
        self.page_count = 0
        self._canvas    = None
        self._y         = 0.0
        self.body_font  = self.BODY_FONT
        self.bold_font  = self.BOLD_FONT

    def _register_fonts(self) -> None:
        pdf = self.settings.pdf
        if not pdf.font_path:
            return
        from reportlab.pdfbase import pdfmetrics
        from reportlab.pdfbase.ttfonts import TTFont

        pdfmetrics.registerFont(TTFont("SyllabusBody", pdf.font_path))
        self.body_font = self.bold_font = "SyllabusBody"
        if pdf.bold_font_path:
            pdfmetrics.registerFont(TTFont("SyllabusBold", pdf.bold_font_path))
            self.bold_font = "SyllabusBold"

    # ── Geometry ─────────────────────────────────────────────────────────────

    def _setup(self, buf: io.BytesIO) -> None:
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.units import mm
        from reportlab.pdfgen import canvas

        self._page_w, self._page_h = A4
        margin = self.settings.pdf.margin_mm * mm
        self._left          = margin
        self._top           = self._page_h - margin
        self._bottom        = margin
        self._content_width = self._page_w - 2 * margin
        self._gap_unit      = mm

        self._register_fonts()
        self._canvas = canvas.Canvas(buf, pagesize=A4)
        self._y = self._top
        self.page_count = 1

    def _new_page(self) -> None:
        self._canvas.showPage()
        self.page_count += 1
        self._y = self._top

    def _space(self, millimetres: float) -> None:
        # Vertical gaps never trigger a page break on their own; the next line does
        if self._y < self._top:
            self._y -= millimetres * self._gap_unit

    def _text(self, text: str, size: float, bold: bool = False, colour=None) -> None:
        from reportlab.lib import colors as rl_colors

        font = self.bold_font if bold else self.body_font
        line_height = size * LINE_FACTOR
        for raw_line in text.split("\n"):
            for line in wrap_line(raw_line, font, size, self._content_width):
                if self._y - line_height < self._bottom:
                    self._new_page()
                self._y -= line_height
                self._canvas.setFont(font, size)
                self._canvas.setFillColor(colour or rl_colors.black)
                self._canvas.drawString(self._left, self._y, line)

    # ── Public API ───────────────────────────────────────────────────────────

    def render(self, blocks: Iterable[ContentBlock]) -> bytes:
        buf = io.BytesIO()
        self._setup(buf)
        pdf    = self.settings.pdf
        accent = _rl_colour(self.settings.institution.accent_colour)

        for block in blocks:
            if isinstance(block, Heading):
                if block.level == 0:
                    self._text(block.text, pdf.title_font_size, bold=True, colour=accent)
                elif block.level == 1:
                    self._space(8)
                    self._text(block.text, pdf.heading_font_size, bold=True, colour=accent)
                    self._space(2)
                else:
                    self._space(3)
                    self._text(block.text, pdf.body_font_size, bold=True)
            elif isinstance(block, Paragraph):
                self._text(block.text, pdf.body_font_size)
            elif isinstance(block, Table):
                self._text(block.as_plain_text().rstrip("\n"), pdf.body_font_size)
                self._space(3)
            else:
                raise TypeError(f"Unsupported content block: {block!r}")

        self._canvas.save()
        return buf.getvalue()


# ─── HTML preview ────────────────────────────────────────────────────────────

class HtmlRenderer:
    """Blocks → standalone HTML document (``st.components.v1.html`` needs a full page)."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    @staticmethod
    def _esc(text: str) -> str:
        return html.escape(text).replace("\n", "<br>")

    def render(self, blocks: Iterable[ContentBlock]) -> str:
        accent = self.settings.institution.accent_colour
        body: list[str] = []
        for block in blocks:
            if isinstance(block, Heading):
                if block.level == 0:
                    body.append(f'<h1 class="title">{self._esc(block.text)}</h1>')
                elif block.level == 1:
                    body.append(f"<h2>{self._esc(block.text)}</h2>")
                else:
                    body.append(f"<h3>{self._esc(block.text)}</h3>")
            elif isinstance(block, Paragraph):
                body.append(f"<p>{self._esc(block.text) if block.text.strip() else '&nbsp;'}</p>")
            elif isinstance(block, Table):
                rows = "".join(
                    "<tr>" + "".join(
                        f"<td><strong>{self._esc(c)}</strong></td>" if i == 0 else f"<td>{self._esc(c)}</td>"
                        for i, c in enumerate(row)
                    ) + "</tr>"
                    for row in block.rows
                )
                head = "".join(f"<th>{self._esc(h)}</th>" for h in block.header)
                body.append(
                    f'<table class="course-outline-table"><thead><tr>{head}</tr></thead>'
                    f"<tbody>{rows}</tbody></table>"
                )
            else:
                raise TypeError(f"Unsupported content block: {block!r}")

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<style>
  body  {{ font-family: 'Segoe UI', Arial, sans-serif; color:#1f2937; margin:24px; line-height:1.5; }}
  h1.title {{ color:{accent}; text-align:center; font-size:24px; margin:0 0 16px; }}
  h2    {{ color:{accent}; border-bottom:2px solid {accent}; padding-bottom:4px; font-size:17px; margin-top:24px; }}
  h3    {{ font-size:14px; margin:12px 0 4px; }}
  p     {{ margin:2px 0; font-size:13px; }}
  table.course-outline-table {{ border-collapse:collapse; width:100%; margin:8px 0 16px; font-size:13px; }}
  table.course-outline-table th {{ background:{accent}; color:#fff; text-align:left; padding:6px; }}
  table.course-outline-table td {{ border:1px solid #e5e7eb; padding:6px; vertical-align:top; }}
</style>
</head>
<body>
{chr(10).join(body)}
</body>
</html>
"""


# ─── Shortcuts ───────────────────────────────────────────────────────────────

def render_docx(blocks: Iterable[ContentBlock], settings: Optional[Settings] = None) -> bytes:
    return DocxRenderer(settings).render(blocks)


def render_pdf(blocks: Iterable[ContentBlock], settings: Optional[Settings] = None) -> bytes:
    return PdfRenderer(settings).render(blocks)


def render_html(blocks: Iterable[ContentBlock], settings: Optional[Settings] = None) -> str:
    return HtmlRenderer(settings).render(blocks)
