"""
flagdec/report.py — text rendering of decoded values.

The format is meant to be grepped and diffed, so it never changes shape::

    ### 0x00000300:
    chn->ana    = AN_REQ_HTTP_PROCESS_BE | AN_REQ_HTTP_TARPIT
    conn->flags = CO_FL_CTRL_READY | CO_FL_XPRT_READY

The ``###`` header only appears when more than one value is processed.
"""

from __future__ import annotations

from typing import Iterable, List, TextIO

from flagdec.decoder import DecodedResult, decode_all
from flagdec.registry import BitDef, Domain, SubField

LABEL_WIDTH: int = 11
SEPARATOR: str = " | "


def format_header(value: int) -> str:
    return f"### 0x{value:08x}:"


def format_line(result: DecodedResult) -> str:
    """One ``label = TOKEN | TOKEN`` line, without the newline."""
    return f"{result.domain.label:<{LABEL_WIDTH}} = {result.text(SEPARATOR)}"


def format_value(value: int, domains: Iterable[Domain], header: bool = False) -> List[str]:
    lines: List[str] = []
    if header:
        lines.append(format_header(value))
    lines.extend(format_line(result) for result in decode_all(domains, value))
    return lines


class ReportPrinter:
    """
    Writes the report for each value to *stream*.

    *domains* is iterated once per value; pass a selection to get registry
    order.
    """

    def __init__(self, stream: TextIO, domains: Iterable[Domain]) -> None:
        self.stream = stream
        self.domains = tuple(domains)
        self.count = 0

    def print_value(self, value: int, header: bool = False) -> None:
        for line in format_value(value, self.domains, header):
            self.stream.write(line + "\n")
        self.count += 1


def describe_domain(domain: Domain) -> List[str]:
    """Definition table for ``--describe``: one line per bit or field value."""
    lines = [f"{domain.keyword}: {domain.label}"
             + (f" ({domain.description})" if domain.description else "")]
    lines.append(f"  0x{domain.known_mask:08x}  (defined bits)")
    lines.append(f"  0x{0:08x}  {domain.empty_token}")
    for entry in domain.entries:
        if isinstance(entry, BitDef):
            lines.append(f"  0x{entry.mask:08x}  {entry.name}")
        elif isinstance(entry, SubField):
            lines.append(f"  0x{entry.mask:08x}  {entry.name}")
            for value, name in entry.values:
                if value or entry.show_zero:
                    lines.append(f"    0x{value:08x}  {name}")
    return lines


def list_domains(domains: Iterable[Domain]) -> List[str]:
    return [f"{d.keyword:<6} {d.label:<{LABEL_WIDTH}}  {d.description}".rstrip()
            for d in domains]
