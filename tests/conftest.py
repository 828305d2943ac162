"""Global pytest configuration and shared declarations.

The fixtures reproduce the two-action setup used throughout the engine tests:
``A`` may succeed or fail, ``B`` always succeeds. Outcome producers are shared
objects because templates match outcomes by identity.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

from callorder.logging import set_global_log_level
from callorder.model.action import Action, action, raises, returns


@dataclass(frozen=True)
class TwoActions:
    ok: object
    fail: object
    b_ok: object
    A: Action
    B: Action


@pytest.fixture
def two_actions() -> TwoActions:
    ok = returns("a", name="ok")
    fail = raises(RuntimeError("boom"), name="fail")
    b_ok = returns("b", name="ok")
    return TwoActions(
        ok=ok,
        fail=fail,
        b_ok=b_ok,
        A=action("A", ok, fail),
        B=action("B", b_ok),
    )


@pytest.fixture(autouse=True)
def _restore_log_level():
    yield
    set_global_log_level(logging.INFO)


# Written into a temporary directory so suite and CLI tests can import it by name.
CONTRACT_MODULE_SOURCE = '''
from callorder import Contract, action, raises, returns

ok = returns(name="ok")
fail = raises(RuntimeError("boom"), name="fail")
done = returns(name="done")

A = action("A", ok, fail)
B = action("B", done)


def a_then_b(a, b):
    a()
    b()


def swallow(a, b):
    try:
        a()
    except RuntimeError:
        pass
    b()


passing = Contract(
    name="passing",
    actions=[A, B],
    valid_sequences=[[[A, ok], [B]], [[A, fail]]],
    pattern=a_then_b,
)


def make_failing():
    return Contract(
        name="failing",
        actions=[A, B],
        valid_sequences=[[[A, ok], [B]], [[A, fail]]],
        pattern=swallow,
    )


broken = Contract(
    name="broken",
    actions=[A],
    valid_sequences=[[["A"]]],
    pattern=lambda a: a(),
)

not_a_contract = 42
'''


@pytest.fixture
def contract_dir(tmp_path) -> Path:
    """Directory holding ``sample_contracts.py``, not yet on ``sys.path``."""
    (tmp_path / "sample_contracts.py").write_text(CONTRACT_MODULE_SOURCE)
    return tmp_path


@pytest.fixture
def contract_module(contract_dir, monkeypatch) -> str:
    """Put the sample contract module on ``sys.path`` and return its name."""
    monkeypatch.syspath_prepend(str(contract_dir))
    monkeypatch.delitem(sys.modules, "sample_contracts", raising=False)
    return "sample_contracts"
