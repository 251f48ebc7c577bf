"""
syllabus_builder — Course syllabus form and document export
===========================================================
Package containing the form model, completion tracking, document
assembly, renderers and draft persistence behind streamlit_app.py.

Module map
----------
  fields.py        Field + section registry, choice options, label helpers.
  outline.py       OutlineModel: modules → class days; markup / text views.
  form_state.py    FormState value object (field values + outline).
  completion.py    Per-section Complete / Incomplete / Optional status.
  assembler.py     FormState → ContentBlocks; export validation gate.
  renderers.py     DOCX (python-docx), PDF (reportlab), HTML preview.
  exporter.py      Snapshot → assemble → render → ExportArtifact.
  persistence.py   JSON draft save / load.
  samples.py       "Load Sample" form state.
  config.py        Settings loaded from .env.
  errors.py        ValidationError, InvariantViolation, ParseError, ExportError.

Data flow
---------
  Streamlit widgets → FormState
    → completion.evaluate_all()            sidebar badges
    → exporter.preview_html()              live preview tab
    → exporter.export_syllabus(fmt)        download buttons
    → persistence.serialize()/deserialize() save / load draft
"""
__version__ = "0.1.0"
