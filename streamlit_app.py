# streamlit_app.py – Syllabus Builder
# Fill in a course syllabus section by section, then export it as Word / PDF.

import logging
import sys
from pathlib import Path

# make src/ importable without installing the package
sys.path.insert(0, str(Path(__file__).parent / "src"))

import streamlit as st
import streamlit.components.v1 as components

from syllabus_builder.completion import STATUS_ICON, SectionStatus, completion_ratio, evaluate_all
from syllabus_builder.config import get_settings
from syllabus_builder.errors import (
    ExportError, InvariantViolation, NotFoundError, ParseError, ValidationError,
)
from syllabus_builder.exporter import ExportFormat, export_syllabus, preview_html
from syllabus_builder.fields import FIELD_REGISTRY, FieldId, FieldKind, all_sections
from syllabus_builder.form_state import FormState
from syllabus_builder.outline import OutlineModel
from syllabus_builder.persistence import deserialize, draft_filename, serialize
from syllabus_builder.samples import sample_form_state

settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.app.log_level, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("syllabus_builder.app")

# Color constants
ACCENT       = settings.institution.accent_colour
TEXT_MUTED   = "#616161"
BORDER       = "#E1DFDD"
STATUS_COLOUR = {
    SectionStatus.COMPLETE:   "#107C41",
    SectionStatus.INCOMPLETE: "#CA5010",
    SectionStatus.OPTIONAL:   "#9E9E9E",
}

# Fields shown in each section; basic-info also carries the optional prerequisites
SECTION_FIELDS: dict[str, tuple[FieldId, ...]] = {
    s.id: s.required_fields + s.optional_fields for s in all_sections()
}
SECTION_FIELDS["basic-info"] = (
    FieldId.COURSE_TITLE, FieldId.COURSE_NUMBER, FieldId.TERM, FieldId.CREDITS,
    FieldId.PREREQUISITES, FieldId.INSTRUCTOR_NAME, FieldId.OFFICE_HOURS,
    FieldId.CLASS_SCHEDULE,
)


# ─── Page config ─────────────────────────────────────────────────────────────
st.set_page_config(
    page_title="Syllabus Builder",
    page_icon="📘",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(f"""
<style>
  [data-testid="stSidebar"] {{ border-right: 1px solid {BORDER}; }}
  .toc-row {{ display:flex; justify-content:space-between; font-size:0.85rem; padding:2px 0; }}
  .toc-status {{ font-size:0.7rem; font-weight:700; text-transform:uppercase; }}
  .brand {{ color:{ACCENT}; font-weight:700; font-size:1.2rem; }}
  .muted {{ color:{TEXT_MUTED}; font-size:0.75rem; }}
</style>
""", unsafe_allow_html=True)


# ─── Widget-key helpers ──────────────────────────────────────────────────────

def _fkey(fid: FieldId) -> str:
    return f"f_{fid.value}"


def _mkey(module_id: str, part: str) -> str:
    return f"m_{module_id}_{part}"


def _dkey(day_id: str, part: str) -> str:
    return f"d_{day_id}_{part}"


def _apply_state(state: FormState) -> None:
    """Push a FormState into widget keys.  Only call from callbacks (before widgets render)."""
    for fid, value in state.values.items():
        st.session_state[_fkey(fid)] = value
    st.session_state["outline"] = state.outline
    for module in state.outline.modules:
        st.session_state[_mkey(module.module_id, "title")] = module.title
        st.session_state[_mkey(module.module_id, "desc")]  = module.description
        for day in module.class_days:
            st.session_state[_dkey(day.day_id, "title")]   = day.title
            st.session_state[_dkey(day.day_id, "content")] = day.content
    for art_key in ("artifact_docx", "artifact_pdf"):
        st.session_state.pop(art_key, None)


def _sync_outline() -> OutlineModel:
    """Copy the latest outline widget values back into the OutlineModel."""
    outline: OutlineModel = st.session_state["outline"]
    for module in outline.modules:
        module.title       = st.session_state.get(_mkey(module.module_id, "title"), module.title)
        module.description = st.session_state.get(_mkey(module.module_id, "desc"), module.description)
        for day in module.class_days:
            day.title   = st.session_state.get(_dkey(day.day_id, "title"), day.title)
            day.content = st.session_state.get(_dkey(day.day_id, "content"), day.content)
    return outline


def _form_state() -> FormState:
    """Current FormState built from widget values."""
    state = FormState.empty()
    for fid in FIELD_REGISTRY:
        key = _fkey(fid)
        if key in st.session_state:
            state.set(fid, st.session_state[key])
    state.outline = _sync_outline()
    return state


def _flash(kind: str, message: str) -> None:
    st.session_state["flash"] = (kind, message)


# ─── Callbacks ───────────────────────────────────────────────────────────────

def _on_load_sample() -> None:
    _apply_state(sample_form_state())
    _flash("success", "Sample data loaded successfully!")


def _on_upload() -> None:
    uploaded = st.session_state.get("draft_upload")
    if uploaded is None:
        return
    if not uploaded.name.lower().endswith(".json"):
        _flash("error", "Please select a valid JSON file")
        return
    try:
        state = deserialize(uploaded.getvalue(), base=_form_state())
    except ParseError as exc:
        logger.warning("Draft load failed for %s: %s", uploaded.name, exc)
        _flash("error", str(exc))
        return
    _apply_state(state)
    logger.info("Loaded draft %s", uploaded.name)
    _flash("success", "Syllabus loaded successfully!")


def _on_add_module() -> None:
    outline = _sync_outline()
    outline.add_module()


def _on_add_class_day(module_id: str) -> None:
    outline = _sync_outline()
    try:
        outline.add_class_day(module_id)
    except NotFoundError as exc:
        _flash("error", str(exc))


def _on_remove_module(module_id: str) -> None:
    outline = _sync_outline()
    try:
        outline.remove_module(module_id)
    except (InvariantViolation, NotFoundError) as exc:
        _flash("error", str(exc))


def _on_remove_class_day(module_id: str, index: int) -> None:
    outline = _sync_outline()
    try:
        outline.remove_class_day(module_id, index)
    except (InvariantViolation, NotFoundError) as exc:
        _flash("error", str(exc))


# ─── Session initialisation ──────────────────────────────────────────────────
if "outline" not in st.session_state:
    _apply_state(FormState.empty())

state    = _form_state()
statuses = evaluate_all(state)


# ─── Sidebar: table of contents + file actions ──────────────────────────────
with st.sidebar:
    st.markdown('<div class="brand">📘 Syllabus Builder</div>', unsafe_allow_html=True)
    if settings.institution.is_configured:
        st.markdown(f'<div class="muted">{settings.institution.name}</div>', unsafe_allow_html=True)
    st.markdown("---")

    ratio = completion_ratio(statuses)
    st.progress(ratio, text=f"{ratio * 100:.0f}% of tracked sections complete")

    for section in all_sections():
        status = statuses[section.id]
        st.markdown(
            f'<div class="toc-row"><span>{STATUS_ICON[status]} {section.title}</span>'
            f'<span class="toc-status" style="color:{STATUS_COLOUR[status]};">{status.value}</span></div>',
            unsafe_allow_html=True,
        )

    st.markdown("---")
    st.button("✨ Load Sample", on_click=_on_load_sample, use_container_width=True)
    st.download_button(
        label="💾 Save Draft (JSON)",
        data=serialize(state).encode("utf-8"),
        file_name=draft_filename(state),
        mime="application/json",
        use_container_width=True,
    )
    st.file_uploader(
        "📂 Load Draft",
        type=["json"],
        key="draft_upload",
        on_change=_on_upload,
    )

    with st.expander("⚙️ Settings"):
        for name, value in settings.status_summary().items():
            st.markdown(f"**{name}:** {value}")


# ─── Flash message from the last callback ───────────────────────────────────
_flash_msg = st.session_state.pop("flash", None)
if _flash_msg:
    kind, message = _flash_msg
    (st.error if kind == "error" else st.success)(message)


# ─── Field widgets ───────────────────────────────────────────────────────────

def _render_field(fid: FieldId) -> None:
    spec = FIELD_REGISTRY[fid]
    key  = _fkey(fid)
    if spec.kind == FieldKind.CHOICE:
        codes = ["", *(o.value for o in spec.options)]
        current = st.session_state.get(key, "")
        if current and current not in codes:
            codes.append(current)   # free text from an older draft
        titles = {o.value: o.title for o in spec.options}
        st.selectbox(
            spec.label, codes, key=key,
            format_func=lambda v: "— Select —" if not v else titles.get(v, v[:60]),
            help=spec.help or None,
        )
        option = next((o for o in spec.options if o.value == st.session_state.get(key)), None)
        if option:
            st.caption(option.text)
    elif spec.kind == FieldKind.TEXTAREA:
        st.text_area(spec.label, key=key, disabled=spec.readonly, help=spec.help or None)
    elif spec.kind == FieldKind.CHECKBOX:
        st.checkbox(spec.label, key=key, help=spec.help or None)
    else:
        st.text_input(spec.label, key=key, help=spec.help or None)


def _render_outline_builder(outline: OutlineModel) -> None:
    for m_idx, module in enumerate(outline.modules, start=1):
        with st.container(border=True):
            c1, c2 = st.columns([5, 1])
            c1.text_input(
                f"Module {m_idx} title", key=_mkey(module.module_id, "title"),
                placeholder=f"Module {m_idx}: Introduction to Topic",
            )
            c2.button(
                "Remove Module", key=f"rm_{module.module_id}",
                on_click=_on_remove_module, args=(module.module_id,),
            )
            st.text_area(
                "Module description (optional)", key=_mkey(module.module_id, "desc"), height=68,
            )
            for d_idx, day in enumerate(module.class_days):
                d1, d2 = st.columns([5, 1])
                d1.text_input(
                    f"Class day {d_idx + 1}", key=_dkey(day.day_id, "title"),
                    placeholder=f"Class Day {d_idx + 1}: Topic Name",
                )
                d2.button(
                    "Remove", key=f"rmd_{day.day_id}",
                    on_click=_on_remove_class_day, args=(module.module_id, d_idx),
                )
                st.text_area(
                    "Readings, assignments and activities", key=_dkey(day.day_id, "content"),
                    placeholder="Readings: …\n\nActivity: …\n\nAssignment: …",
                )
            st.button(
                "➕ Add Class Day", key=f"addd_{module.module_id}",
                on_click=_on_add_class_day, args=(module.module_id,),
            )
    st.button("➕ Add Module", on_click=_on_add_module)

    if outline.is_non_empty():
        with st.expander("Outline preview"):
            st.markdown(outline.render_markup(), unsafe_allow_html=True)


def _export_button(fmt: ExportFormat, label: str, art_key: str) -> None:
    if st.button(label, key=f"btn_{art_key}", use_container_width=True):
        try:
            st.session_state[art_key] = export_syllabus(state, fmt, settings)
        except ValidationError as exc:
            st.session_state.pop(art_key, None)
            st.error(exc.user_message())
        except ExportError as exc:
            st.session_state.pop(art_key, None)
            st.error(str(exc))
    artifact = st.session_state.get(art_key)
    if artifact:
        st.download_button(
            label=f"⬇️ Download {artifact.filename}",
            data=artifact.data,
            file_name=artifact.filename,
            mime=artifact.mime,
            key=f"dl_{art_key}",
            use_container_width=True,
        )


# ─── Main area ───────────────────────────────────────────────────────────────
st.title("📘 Syllabus Builder")
tab_build, tab_preview, tab_export = st.tabs(["✏️ Build", "👁️ Preview", "📤 Export"])

with tab_build:
    for section in all_sections():
        status = statuses[section.id]
        with st.expander(f"{STATUS_ICON[status]} {section.title}", expanded=section.id == "basic-info"):
            if section.id == "outline":
                _render_outline_builder(st.session_state["outline"])
            else:
                for fid in SECTION_FIELDS[section.id]:
                    _render_field(fid)

with tab_preview:
    components.html(preview_html(state, settings), height=900, scrolling=True)

with tab_export:
    st.markdown("Exports use the form exactly as it is now. Every required field must be filled in first.")
    col_w, col_p = st.columns(2)
    with col_w:
        _export_button(ExportFormat.DOCX, "📄 Export to Word", "artifact_docx")
    with col_p:
        _export_button(ExportFormat.PDF, "📕 Export to PDF", "artifact_pdf")
