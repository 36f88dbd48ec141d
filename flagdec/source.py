"""
flagdec/source.py — where the values to decode come from.

Two sources exist:

* :class:`TokenSource` — the remaining command-line tokens, one value each;
* :class:`StreamSource` — lines read from a stream (``-`` on the command
  line), cleaned of the punctuation that usually comes along when a value
  is copy-pasted from a log line or a debugger (``flags = 0x12UL``).

Both parse with C ``strtoul(s, &end, 0)`` rules and give up on the first
token that does not parse completely: a half-pasted value is far more
likely than a deliberate one, and silently skipping it would mislead.
Values are parsed lazily, so everything before the bad token is reported.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, List, Optional, Sequence, TextIO, Union

from flagdec.errors import UnparsableValueError, UsageError
from flagdec.registry import WORD_MASK

logger = logging.getLogger(__name__)

STDIN_TOKEN: str = "-"

# Longest line kept from the stream; the rest of a longer line is dropped.
LINE_MAX: int = 256

_LEADING_DELIMITERS = " \t:="

# sign, digits and letters, except the U/L of C integer suffixes
_NUMBER_PREFIX_RE = re.compile(r"[-+0-9A-KM-TV-Za-km-tv-z]*")

_INTEGER_RE = re.compile(
    r"""
    [ \t\n\r\f\v]*
    (?P<sign>[+-]?)
    (?:
        0[xX](?P<hex>[0-9a-fA-F]+)
      | (?P<oct>0[0-7]*)
      | (?P<dec>[1-9][0-9]*)
    )
    \Z
    """,
    re.VERBOSE,
)


# ===================================================================== #
#  Parsing                                                               #
# ===================================================================== #

def parse_value(token: str) -> int:
    """
    Parse *token* as an unsigned 32-bit integer.

    ``0x``/``0X`` selects hexadecimal, a leading ``0`` octal, anything else
    decimal.  A leading sign is accepted; negative values wrap modulo 2**32
    and wider values keep their low 32 bits.

    Raises
    ------
    UnparsableValueError
        If *token* is empty or anything is left after the number.
    """
    match = _INTEGER_RE.match(token)
    if match is None:
        raise UnparsableValueError(token)

    if match.group("hex") is not None:
        magnitude = int(match.group("hex"), 16)
    elif match.group("oct") is not None:
        magnitude = int(match.group("oct"), 8)
    else:
        magnitude = int(match.group("dec"), 10)

    if match.group("sign") == "-":
        magnitude = -magnitude
    return magnitude & WORD_MASK


def normalize_line(line: str) -> str:
    """
    Extract the numeric literal from a pasted line.

    Leading spaces, tabs, ``:`` and ``=`` are skipped, then the token stops
    at the first character that cannot belong to the number.  ``U`` and
    ``L`` always stop it, which drops C suffixes such as ``UL``::

        >>> normalize_line("  = 0x12UL\\n")
        '0x12'
    """
    stripped = line.lstrip(_LEADING_DELIMITERS)
    return _NUMBER_PREFIX_RE.match(stripped).group(0)


# ===================================================================== #
#  Sources                                                               #
# ===================================================================== #

class TokenSource:
    """Values given directly on the command line."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens: List[str] = list(tokens)

    @property
    def multi(self) -> bool:
        return len(self.tokens) > 1

    def __iter__(self) -> Iterator[int]:
        for token in self.tokens:
            value = parse_value(token.strip())
            logger.debug("token %r -> 0x%08x", token, value)
            yield value


class StreamSource:
    """
    Values read line by line from *stream* until end of input.

    Only the first *line_max* characters of a line are looked at.
    """

    multi = True

    def __init__(self, stream: TextIO, line_max: int = LINE_MAX) -> None:
        self.stream = stream
        self.line_max = line_max

    def _read_line(self) -> Optional[str]:
        line = self.stream.readline(self.line_max)
        if not line:
            return None
        if not line.endswith("\n"):
            # drop the tail of an overlong line
            tail = line
            while tail and not tail.endswith("\n"):
                tail = self.stream.readline(self.line_max)
        return line

    def __iter__(self) -> Iterator[int]:
        lineno = 0
        while True:
            line = self._read_line()
            if line is None:
                logger.debug("end of input after %d line(s)", lineno)
                return
            lineno += 1
            token = normalize_line(line)
            value = parse_value(token)
            logger.debug("line %d: %r -> 0x%08x", lineno, token, value)
            yield value


def open_source(tokens: Sequence[str], stream: TextIO) -> Union[TokenSource, StreamSource]:
    """
    Pick the value source for the tokens left after domain selection.

    A lone ``-`` reads from *stream*; anything else is a list of values.

    Raises
    ------
    UsageError
        If no value was given, or ``-`` is followed by more tokens.
    """
    if not tokens:
        raise UsageError("missing value argument")
    if tokens[0] == STDIN_TOKEN:
        if len(tokens) > 1:
            raise UsageError(
                f"'{STDIN_TOKEN}' must be the only value argument",
            ).with_hint("pass values either on the command line or on stdin")
        logger.info("reading values from stdin")
        return StreamSource(stream)
    return TokenSource(tokens)
