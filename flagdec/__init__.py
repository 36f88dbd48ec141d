"""flagdec — decode captured 32-bit flag words into symbolic names.

Engineers debugging a proxy usually end up with a bare number copied from a
log line or a core dump (``0x00a1c002``) and need to know which named bits
compose it.  This package keeps one static bit table per flag *domain*
(connection flags, channel flags, stream flags, task state, ...) and decodes
values against them.

Submodules
----------
registry
    ``BitDef`` / ``SubField`` / ``Domain`` definitions and the
    ``DomainRegistry`` holding them.

domains
    The static tables and the default ``REGISTRY``.

decoder
    ``decode()`` — one value against one domain.

selector
    Greedy domain-keyword selection from the front of the argument list.

source
    Value parsing (``strtoul`` rules) and the token / stream value sources.

report
    Fixed, greppable text rendering of decoded values.

errors
    ``FlagdecError`` hierarchy with structured error codes.

main
    CLI entry-point.

Usage
-----
Command-line::

    flagdec conn 0x00000300
    flagdec txn strm 0x2a0 0x4a000
    grep flags= trace.log | flagdec -

Programmatic::

    from flagdec.domains import REGISTRY
    from flagdec.decoder import decode

    result = decode(REGISTRY.lookup_domain("conn"), 0x300)
    print(" | ".join(result.tokens))

"""

from __future__ import annotations

__version__: str = "0.1.0"
__all__: list[str] = [
    "__version__",
    "decoder",
    "domains",
    "errors",
    "registry",
    "report",
    "selector",
    "source",
]
