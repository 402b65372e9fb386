"""Locate and classify a single option in flat ``.config`` text.

Kernel config text has no strict grammar: an option shows up either as an
assignment (``CONFIG_FOO=y``) or as a comment (``# CONFIG_FOO is not set``),
and option names are prefixes of one another (``CONFIG_FOO`` and
``CONFIG_FOO_BAR``). A line is a candidate for a symbol when it contains the
symbol but not ``symbol + "_"``; exactly one candidate may exist.

The ``symbol + "_"`` guard only rules out longer names that extend the symbol
with an underscore. ``CONFIG_FOO`` still matches a line for ``CONFIG_FOOD``.
"""

import logging
import re
from collections.abc import Iterable

from kcheck.errors import (
    DuplicateConfigError,
    EmptySymbolError,
    KernelConfigParseError,
    UnknownKernelConfigOptionError,
)
from kcheck.kconfig import U64_MAX, KconfigState, StateKind

logger = logging.getLogger(__name__)

NOT_SET_MARKER = "is not set"

_TRISTATE = {
    "y": KconfigState.ON,
    "m": KconfigState.MODULE,
    "n": KconfigState.OFF,
}

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^0[xX][0-9a-fA-F]+$")
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)
# Line breaks are escaped so a Text value stays on one line.
_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"})
_UNESCAPES = {"n": "\n", "r": "\r"}


def _unescape(text: str) -> str:
    return _ESCAPE_RE.sub(lambda m: _UNESCAPES.get(m.group(1), m.group(1)), text)


def _escape(text: str) -> str:
    return text.translate(_ESCAPES)


def _parse_number(value: str) -> int | None:
    if _DECIMAL_RE.match(value):
        number = int(value, 10)
    elif _HEX_RE.match(value):
        number = int(value, 16)
    else:
        return None
    return number if number <= U64_MAX else None


def parse_value(value: str) -> KconfigState:
    """Classify the right-hand side of an assignment line."""
    value = value.strip()
    if value in _TRISTATE:
        return _TRISTATE[value]
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return KconfigState.text(_unescape(value[1:-1]))
    number = _parse_number(value)
    if number is not None:
        return KconfigState.number(number)
    raise UnknownKernelConfigOptionError(value)


def classify_line(line: str, symbol: str) -> KconfigState:
    """Classify a line already known to mention ``symbol``."""
    prefix, _, suffix = line.partition(symbol)
    is_comment = prefix.strip().startswith("#")

    if is_comment and NOT_SET_MARKER in suffix:
        return KconfigState.NOT_SET
    if not is_comment and "=" in suffix:
        return parse_value(suffix.split("=", 1)[1])
    raise KernelConfigParseError(line)


def candidate_lines(lines: Iterable[str], symbol: str) -> list[str]:
    guard = f"{symbol}_"
    return [line for line in lines if symbol in line and guard not in line]


def lookup(lines: Iterable[str], symbol: str) -> KconfigState:
    """Return the observed state of ``symbol`` in ``lines``.

    Raises:
        DuplicateConfigError: more than one line matches the symbol. This
            wins over any error the matching lines themselves would raise.
        KernelConfigParseError: the matching line cannot be classified.
        EmptySymbolError: ``symbol`` is empty.
        UnknownKernelConfigOptionError: the matching assignment has an
            unrecognized value.
    """
    if not symbol:
        raise EmptySymbolError()

    candidates = candidate_lines(lines, symbol)
    logger.debug("%s: %d candidate line(s) %r", symbol, len(candidates), candidates)

    if not candidates:
        return KconfigState.NOT_FOUND
    if len(candidates) > 1:
        raise DuplicateConfigError(symbol)
    return classify_line(candidates[0], symbol)


def render_option(symbol: str, state: KconfigState) -> str | None:
    """Render ``state`` as the config line ``lookup`` reads back as ``state``.

    ``NotFound`` has no line. The virtual states render as their canonical
    member: ``Disabled`` as ``=n`` and ``Enabled`` as ``=y``.
    """
    kind = state.kind
    if kind == StateKind.NOT_FOUND:
        return None
    if kind == StateKind.NOT_SET:
        return f"# {symbol} {NOT_SET_MARKER}"
    if kind in (StateKind.ON, StateKind.ENABLED):
        return f"{symbol}=y"
    if kind == StateKind.MODULE:
        return f"{symbol}=m"
    if kind in (StateKind.OFF, StateKind.DISABLED):
        return f"{symbol}=n"
    if kind == StateKind.VALUE:
        return f"{symbol}={state.payload}"
    assert isinstance(state.payload, str)
    return f'{symbol}="{_escape(state.payload)}"'
