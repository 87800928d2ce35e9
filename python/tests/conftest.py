# -*- encoding: utf-8 -*-
"""
conftest.py - shared fixtures for the htmleffect tests.
"""

from __future__ import annotations

import pytest

from htmleffect import ui_log
from htmleffect.host import Document


class CountingElement:
    """Test double whose innerHTML primitive counts and records every write."""

    def __init__(self, content: str = "", error: Exception = None):
        self._content = content
        self.error = error
        self.writes = []

    @property
    def innerHTML(self):
        return self._content

    @innerHTML.setter
    def innerHTML(self, value):
        self.writes.append(value)
        if self.error is not None:
            raise self.error
        self._content = value


@pytest.fixture
def document():
    return Document.blank()


@pytest.fixture
def counting():
    return CountingElement(content="<p>initial</p>")


@pytest.fixture(autouse=True)
def reset_ui_log():
    """Each test starts with no sinks and no document for ui_log."""
    ui_log.clear_sinks()
    ui_log.set_document(None)
    yield
    ui_log.clear_sinks()
    ui_log.set_document(None)


@pytest.fixture
def make_counting():
    return CountingElement
