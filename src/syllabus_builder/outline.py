"""
outline.py – Course Outline model
=================================
Ordered modules, each owning an ordered list of class days.

  OutlineModel
    • add / remove modules and class days (at least one of each is
      always kept, so the builder never shows an empty list).
    • to_serializable()  → the ``courseOutline`` object of a saved draft.
    • render_markup()    → HTML for the in-app outline preview.
    • render_plain_text()→ text form used by the PDF export.

Filtering rule shared by every export path: a class day is exported only
when both its title and content are non-empty after trimming; a module
only when it has a title or at least one exported class day.

Two "is the outline filled in?" predicates exist on purpose:

  is_non_empty()    some class day is complete   (sidebar status)
  has_class_days()  some module has any class day (export gate)
"""

from __future__ import annotations

import html
import itertools
from dataclasses import dataclass, field
from typing import Any

from syllabus_builder.errors import InvariantViolation, NotFoundError

OUTLINE_TABLE_HEADER: tuple[str, str] = (
    "Class Day & Title",
    "Readings, Assignments, and Activities",
)

_ids = itertools.count(1)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{next(_ids)}"


# ─── Data classes ────────────────────────────────────────────────────────────

@dataclass
class ClassDay:
    """One scheduled session."""
    title:   str = ""
    content: str = ""
    day_id:  str = field(default_factory=lambda: _new_id("day"), compare=False)

    @property
    def is_complete(self) -> bool:
        return bool(self.title.strip() and self.content.strip())


@dataclass
class Module:
    """A labelled group of class days.  ``module_id`` is only a UI handle."""
    title:       str = ""
    description: str = ""
    class_days:  list[ClassDay] = field(default_factory=list)
    module_id:   str = field(default_factory=lambda: _new_id("module"), compare=False)


def format_class_days(days: list[tuple[str, str]]) -> str:
    """``title\\ncontent\\n`` per day, adjacent days separated by one blank line."""
    return "\n".join(f"{title}\n{content}\n" for title, content in days)


# ─── Outline model ───────────────────────────────────────────────────────────

class OutlineModel:
    """Ordered collection of modules.  Identity is positional for export."""

    def __init__(self, modules: list[Module] | None = None):
        self.modules: list[Module] = list(modules or [])

    @classmethod
    def with_initial_module(cls) -> "OutlineModel":
        """A fresh outline as the builder first shows it: one module, one class day."""
        model = cls()
        model.add_module()
        return model

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OutlineModel):
            return NotImplemented
        return self.modules == other.modules

    def __repr__(self) -> str:
        return f"OutlineModel(modules={self.modules!r})"

    # ── Editing ──────────────────────────────────────────────────────────────

    def get_module(self, module_id: str) -> Module:
        for module in self.modules:
            if module.module_id == module_id:
                return module
        raise NotFoundError(f"Unknown module: {module_id}")

    def add_module(self) -> str:
        """Append an empty module with one empty class day; return its handle."""
        module = Module(class_days=[ClassDay()])
        self.modules.append(module)
        return module.module_id

    def add_class_day(self, module_id: str) -> int:
        """Append an empty class day to *module_id*; return its index."""
        module = self.get_module(module_id)
        module.class_days.append(ClassDay())
        return len(module.class_days) - 1

    def remove_module(self, module_id: str) -> None:
        module = self.get_module(module_id)
        if len(self.modules) <= 1:
            raise InvariantViolation("You must have at least one module.")
        self.modules.remove(module)

    def remove_class_day(self, module_id: str, index: int) -> None:
        module = self.get_module(module_id)
        if not 0 <= index < len(module.class_days):
            raise NotFoundError(f"Module {module_id} has no class day at index {index}")
        if len(module.class_days) <= 1:
            raise InvariantViolation("Each module must have at least one class day.")
        del module.class_days[index]

    # ── Predicates ───────────────────────────────────────────────────────────

    def is_non_empty(self) -> bool:
        """True iff at least one class day has both title and content filled."""
        return any(day.is_complete for m in self.modules for day in m.class_days)

    def has_class_days(self) -> bool:
        """Export gate: some module exists and some module holds at least one class day."""
        return bool(self.modules) and any(m.class_days for m in self.modules)

    # ── Export views ─────────────────────────────────────────────────────────

    def exported_modules(self) -> list[Module]:
        """Trimmed copies of the modules / class days that pass the filtering rule."""
        result: list[Module] = []
        for module in self.modules:
            days = [
                ClassDay(title=d.title.strip(), content=d.content.strip())
                for d in module.class_days
                if d.is_complete
            ]
            title = module.title.strip()
            if title or days:
                result.append(Module(
                    title=title,
                    description=module.description.strip(),
                    class_days=days,
                ))
        return result

    def to_serializable(self) -> dict[str, Any]:
        return {
            "modules": [
                {
                    "title":       m.title,
                    "description": m.description,
                    "classDays":   [{"title": d.title, "content": d.content} for d in m.class_days],
                }
                for m in self.exported_modules()
            ]
        }

    @classmethod
    def from_serializable(cls, data: dict[str, Any]) -> "OutlineModel":
        """Rebuild from the ``courseOutline`` shape; an empty module list yields the default outline."""
        modules = [
            Module(
                title=m.get("title") or "",
                description=m.get("description") or "",
                class_days=[
                    ClassDay(title=d.get("title") or "", content=d.get("content") or "")
                    for d in m.get("classDays") or []
                ],
            )
            for m in data.get("modules") or []
        ]
        if not modules:
            return cls.with_initial_module()
        return cls(modules)

    def render_markup(self) -> str:
        parts: list[str] = []
        for module in self.exported_modules():
            if module.title:
                parts.append('<div class="course-outline-module">')
                parts.append(f"<h4>{html.escape(module.title)}</h4>")
                if module.description:
                    parts.append(f"<p>{html.escape(module.description)}</p>")
                parts.append("</div>")
            if module.class_days:
                parts.append('<table class="course-outline-table">')
                parts.append(
                    "<thead><tr>"
                    + "".join(f"<th>{html.escape(h)}</th>" for h in OUTLINE_TABLE_HEADER)
                    + "</tr></thead>"
                )
                parts.append("<tbody>")
                for day in module.class_days:
                    content = html.escape(day.content).replace("\n", "<br>")
                    parts.append(
                        f'<tr><td class="class-day-title-cell"><strong>{html.escape(day.title)}</strong></td>'
                        f'<td class="class-day-content-cell">{content}</td></tr>'
                    )
                parts.append("</tbody></table>")
        return "\n".join(parts)

    def render_plain_text(self) -> str:
        texts: list[str] = []
        for module in self.exported_modules():
            text = ""
            if module.title:
                text += f"{module.title}\n"
                if module.description:
                    text += f"{module.description}\n"
                text += "\n"
            text += format_class_days([(d.title, d.content) for d in module.class_days])
            texts.append(text)
        return "\n\n".join(texts)
