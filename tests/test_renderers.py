"""
Tests for the DOCX / PDF / HTML renderers (renderers.py).
All renderers should return non-empty, structurally valid output.
"""
import io

import pytest
from factories import make_outline, make_settings, make_state

from syllabus_builder.assembler import Heading, Paragraph, Table, assemble
from syllabus_builder.renderers import (
    DocxRenderer,
    HtmlRenderer,
    PdfRenderer,
    _rl_colour,
    render_docx,
    render_html,
    render_pdf,
    wrap_line,
    xml_safe,
)


@pytest.fixture
def blocks(ready_state, settings):
    return assemble(ready_state, settings)


@pytest.fixture
def sample_blocks(sample_state, settings):
    return assemble(sample_state, settings)


# ─── Word ────────────────────────────────────────────────────────────────────

class TestDocxRenderer:
    def test_returns_zip_bytes(self, blocks, settings):
        data = render_docx(blocks, settings)
        assert isinstance(data, bytes)
        # .docx is a zip container
        assert data[:2] == b"PK"

    def test_heading_text_present(self, blocks, settings):
        import docx
        doc = docx.Document(io.BytesIO(render_docx(blocks, settings)))
        texts = [p.text for p in doc.paragraphs]
        assert "Intro to Testing" in texts
        assert "Course Outline" in texts
        assert "Stern Code of Conduct" in texts

    def test_outline_table(self, sample_blocks, settings):
        import docx
        doc = docx.Document(io.BytesIO(render_docx(sample_blocks, settings)))
        assert len(doc.tables) == 2
        first = doc.tables[0]
        assert first.rows[0].cells[0].text == "Class Day & Title"
        assert first.rows[1].cells[0].text == "Class 1: Course Introduction"
        assert len(first.rows) == 3

    def test_blank_paragraph_kept(self, settings):
        import docx
        data = DocxRenderer(settings).render([Heading("T", 0), Paragraph(""), Paragraph("x")])
        doc = docx.Document(io.BytesIO(data))
        assert [p.text for p in doc.paragraphs][-2:] == [" ", "x"]

    def test_unknown_block_raises(self, settings):
        with pytest.raises(TypeError):
            DocxRenderer(settings).render([object()])

    def test_control_characters_stripped(self, settings):
        import docx
        blocks = [
            Heading("Title\x0b", 0),
            Paragraph("Office\x0bHours\x00"),
            Table(header=("a", "b"), rows=(("Day\x1f", "Read\x0c"),)),
        ]
        doc = docx.Document(io.BytesIO(DocxRenderer(settings).render(blocks)))
        texts = [p.text for p in doc.paragraphs]
        assert "Title" in texts
        assert "OfficeHours" in texts
        assert doc.tables[0].rows[1].cells[0].text == "Day"
        assert doc.tables[0].rows[1].cells[1].text == "Read"


class TestXmlSafe:
    def test_keeps_tabs_newlines_and_unicode(self):
        assert xml_safe("a\tb\nc ✅ 你好") == "a\tb\nc ✅ 你好"

    def test_drops_control_characters(self):
        assert xml_safe("a\x00b\x0bc\x1fd") == "abcd"


# ─── PDF ─────────────────────────────────────────────────────────────────────

class TestPdfRenderer:
    def test_pdf_header_signature(self, blocks, settings):
        data = render_pdf(blocks, settings)
        assert data[:4] == b"%PDF", "Output must start with %PDF header"

    def test_short_document_single_page(self, settings):
        renderer = PdfRenderer(settings)
        renderer.render([Heading("Title", 0), Paragraph("Hello")])
        assert renderer.page_count == 1

    def test_long_content_paginates(self, settings):
        renderer = PdfRenderer(settings)
        long_text = "\n".join(f"Line {i}" for i in range(200))
        data = renderer.render([Heading("Title", 0), Paragraph(long_text)])
        assert renderer.page_count > 1
        assert data[:4] == b"%PDF"

    def test_long_line_wraps(self, settings):
        renderer = PdfRenderer(settings)
        renderer.render([Paragraph("word " * 3000)])
        assert renderer.page_count > 1

    def test_sample_document(self, sample_blocks, settings):
        renderer = PdfRenderer(settings)
        data = renderer.render(sample_blocks)
        assert len(data) > 0
        assert renderer.page_count >= 1

    def test_table_flattened(self, settings):
        table = Table(header=("a", "b"), rows=(("Intro", "Read"),))
        data = PdfRenderer(settings).render([table])
        assert data[:4] == b"%PDF"

    def test_unknown_block_raises(self, settings):
        with pytest.raises(TypeError):
            PdfRenderer(settings).render([object()])

    def test_long_url_stays_inside_margins(self, settings, monkeypatch):
        from reportlab.lib.units import mm
        from reportlab.pdfbase.pdfmetrics import stringWidth
        from reportlab.pdfgen.canvas import Canvas

        drawn = []
        original = Canvas.drawString

        def _record(canvas, x, y, text, *args, **kwargs):
            drawn.append((canvas._fontname, canvas._fontsize, text))
            return original(canvas, x, y, text, *args, **kwargs)

        monkeypatch.setattr(Canvas, "drawString", _record)
        url = "https://brightspace.example.edu/d2l/home/" + "a" * 300
        PdfRenderer(settings).render([Heading("Links", 1), Paragraph(f"Course site: {url}")])

        width = 210 * mm - 2 * settings.pdf.margin_mm * mm
        assert len(drawn) > 2
        for font, size, text in drawn:
            assert stringWidth(text, font, size) <= width
        assert "".join(t for _, _, t in drawn[1:]).endswith("a" * 300)

    def test_ttf_font_used_when_configured(self, blocks):
        import os
        import reportlab
        fonts_dir = os.path.join(os.path.dirname(reportlab.__file__), "fonts")
        settings = make_settings(
            font_path=os.path.join(fonts_dir, "Vera.ttf"),
            bold_font_path=os.path.join(fonts_dir, "VeraBd.ttf"),
        )
        renderer = PdfRenderer(settings)
        data = renderer.render(blocks)
        assert data[:4] == b"%PDF"
        assert renderer.body_font == "SyllabusBody"
        assert renderer.bold_font == "SyllabusBold"

    def test_default_font_is_helvetica(self, blocks, settings):
        renderer = PdfRenderer(settings)
        renderer.render(blocks)
        assert renderer.body_font == "Helvetica"


class TestWrapLine:
    WIDTH = 200.0

    def test_breaks_at_spaces(self):
        from reportlab.pdfbase.pdfmetrics import stringWidth
        lines = wrap_line("alpha beta gamma delta " * 10, "Helvetica", 11, self.WIDTH)
        assert len(lines) > 1
        assert lines[0].startswith("alpha beta")
        for line in lines:
            assert stringWidth(line, "Helvetica", 11) <= self.WIDTH

    def test_unbreakable_token_split_into_chunks(self):
        from reportlab.pdfbase.pdfmetrics import stringWidth
        token = "x" * 400
        lines = wrap_line(token, "Helvetica", 11, self.WIDTH)
        assert len(lines) > 1
        assert "".join(lines) == token
        for line in lines:
            assert stringWidth(line, "Helvetica", 11) <= self.WIDTH

    def test_empty_line_kept(self):
        assert wrap_line("", "Helvetica", 11, self.WIDTH) == [""]


class TestRlColour:
    def test_full_hex(self):
        c = _rl_colour("#57068C")
        assert c.red == pytest.approx(0x57 / 255)
        assert c.blue == pytest.approx(0x8C / 255)

    def test_short_hex(self):
        c = _rl_colour("#fff")
        assert c.green == pytest.approx(1.0)


# ─── HTML preview ────────────────────────────────────────────────────────────

class TestHtmlRenderer:
    def test_full_document(self, blocks, settings):
        html = render_html(blocks, settings)
        assert html.startswith("<!DOCTYPE html>")
        assert '<h1 class="title">Intro to Testing</h1>' in html
        assert "<h2>Course Outline</h2>" in html
        assert "#57068C" in html

    def test_escapes_text(self, settings):
        html = HtmlRenderer(settings).render([Paragraph("<script>alert(1)</script>")])
        assert "<script>" not in html
        assert "&lt;script&gt;" in html

    def test_outline_table_markup(self, settings):
        state = make_state(outline=make_outline(("Week 1", [("Intro", "Read\nDiscuss")])))
        html = render_html(assemble(state, settings), settings)
        assert 'class="course-outline-table"' in html
        assert "<td><strong>Intro</strong></td>" in html
        assert "Read<br>Discuss" in html
