# tests/conftest.py
"""
Shared fixtures, tables and helpers for the flagdec test-suite.
"""

import io

import pytest

from flagdec.domains import REGISTRY
from flagdec.main import main
from flagdec.registry import BitDef, Domain, DomainRegistry, SubField


# ═══════════════════════════════════════════════════════════════════════════
#  Small hand-made domain exercising every decoder path
# ═══════════════════════════════════════════════════════════════════════════

TOY_MODE = SubField(
    name="TOY_MODE_MASK",
    mask=0x00000006,
    values={0x0: "TOY_MODE_NONE", 0x2: "TOY_MODE_A", 0x4: "TOY_MODE_B"},
    show_zero=True,
)

TOY = Domain(
    keyword="toy",
    label="toy->flags",
    zero_label="TOY_IDLE",
    entries=(
        BitDef("TOY_A", 0x00000001),
        TOY_MODE,
        BitDef("TOY_C", 0x00000008),
    ),
)

PLAIN = Domain(
    keyword="plain",
    label="plain",
    entries=(
        BitDef("P_LOW", 0x00000001),
        BitDef("P_HIGH", 0x80000000),
    ),
)

TOY_REGISTRY = DomainRegistry([TOY, PLAIN])


# ═══════════════════════════════════════════════════════════════════════════
#  Values used for property-style checks across every shipped domain
# ═══════════════════════════════════════════════════════════════════════════

SAMPLE_VALUES = [
    0x00000000,
    0x00000001,
    0x00000004,
    0x000000e0,
    0x00000600,
    0x0000d000,
    0x00023801,
    0x00a1c002,
    0x7fffffff,
    0x80000000,
    0xdeadbeef,
    0xffffffff,
]

KEYWORDS = [
    "ana", "chn", "conn", "sc", "sd", "stet",
    "strm", "task", "txn", "hsl", "htx", "hmsg",
]


def domain(keyword):
    """Shortcut to a shipped domain."""
    d = REGISTRY.lookup_domain(keyword)
    assert d is not None, keyword
    return d


def run_cli(argv, stdin_text=""):
    """Run the CLI in-process, return ``(exit_code, stdout, stderr)``.

    *stdin_text* may be ``bytes``; it is then read through a UTF-8 text
    wrapper, the way the process stdin is.
    """
    out, err = io.StringIO(), io.StringIO()
    if isinstance(stdin_text, bytes):
        stdin = io.TextIOWrapper(io.BytesIO(stdin_text), encoding="utf-8")
    else:
        stdin = io.StringIO(stdin_text)
    code = main(list(argv), stdin=stdin, stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


@pytest.fixture
def registry():
    return REGISTRY


@pytest.fixture
def toy_registry():
    return TOY_REGISTRY
