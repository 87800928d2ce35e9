# -*- encoding: utf-8 -*-
"""
test_doing.py - tests for running effects on the hio scheduler.
"""

from __future__ import annotations

import pytest
from hio.base import doing

from htmleffect import Effect, set_inner_html
from htmleffect import doing as effect_doing
from htmleffect.doing import EffectDoer, run_effects


def _recorder(log, name):
    return Effect(lambda: log.append(name), label=name)


def test_effect_doer_runs_in_order():
    log = []
    doer = run_effects([_recorder(log, "a"), _recorder(log, "b"), _recorder(log, "c")])
    assert log == ["a", "b", "c"]
    assert doer.ran == 3
    assert doer.pending == 0


def test_effect_doer_runs_one_effect_per_recur():
    log = []
    doer = EffectDoer(effects=[_recorder(log, "a"), _recorder(log, "b")])

    assert doer.recur(0.0) is False
    assert log == ["a"]
    assert doer.recur(0.0) is False
    assert log == ["a", "b"]
    assert doer.recur(0.0) is True
    assert doer.ran == 2


def test_persistent_doer_waits_for_push():
    log = []
    doer = EffectDoer(persist=True)

    assert doer.recur(0.0) is False
    doer.push(_recorder(log, "late"))
    assert doer.pending == 1
    assert doer.recur(0.0) is False
    assert log == ["late"]
    assert doer.recur(0.0) is False


def test_persistent_doer_stops_at_limit():
    log = []
    doer = EffectDoer(effects=[_recorder(log, "a")], persist=True)
    doist = doing.Doist(real=False, limit=0.25, doers=[doer], tock=0.03125)
    doist.do()
    assert log == ["a"]


def test_scheduled_set_inner_html(document):
    preview = document.createElement("div")
    document.body.appendChild(preview)
    effects = [set_inner_html(preview)("<p>1</p>"), set_inner_html(preview)("<p>2</p>")]

    assert preview.innerHTML == ""
    run_effects(effects)
    assert preview.innerHTML == "<p>2</p>"


def test_effect_error_leaves_scheduler_unchanged():
    error = RuntimeError("boom")
    log = []

    def fail():
        raise error

    effects = [_recorder(log, "before"), Effect(fail), _recorder(log, "after")]
    with pytest.raises(RuntimeError) as excinfo:
        run_effects(effects)

    assert excinfo.value is error
    assert log == ["before"]


def test_public_surface_is_doer_only():
    """Only the doer and its drain helper are exported; no browser loop."""
    assert effect_doing.__all__ == ["EffectDoer", "run_effects"]
    assert not hasattr(effect_doing, "WebDoist")
