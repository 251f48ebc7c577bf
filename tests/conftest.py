"""
Shared pytest fixtures for the Syllabus Builder test suite.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import sys
import os

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)


import pytest

from factories import make_outline, make_settings, make_state

from syllabus_builder.form_state import FormState
from syllabus_builder.samples import sample_form_state


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def unbranded_settings():
    return make_settings(institution_name="", short_name="")


@pytest.fixture
def ready_state():
    """Minimal state that passes the export gate."""
    return make_state()


@pytest.fixture
def empty_state():
    return FormState.empty()


@pytest.fixture
def sample_state():
    return sample_form_state()


@pytest.fixture
def two_module_outline():
    return make_outline(
        ("Week 1", [("Intro", "Read Ch.1\nDiscuss"), ("Lab", "Set up tools")]),
        ("Week 2", [("Review", "Quiz")]),
    )
