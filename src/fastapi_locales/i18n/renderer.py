"""Message rendering: key lookup plus placeholder substitution.

Call shapes are classified once into a CallForm and routed to one of
the substitution strategies:

    render(res, "k")                       -> text as-is
    render(res, "{0} {1} {1} {0}", ["foo", "bar"])   -> "foo bar bar foo"
    render(res, "{a} {b} {b} {a}", {"a": "foo", "b": "bar"})
                                           -> "foo bar bar foo"
    render(res, "%s items", 3)             -> "3 items"
    render(res, "%s of %d", "page", 2)     -> "page of 2"
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import json
import math
import numbers
import re
from typing import Any

from fastapi_locales.core.logging import get_logger

logger = get_logger(__name__)

INDEX_PLACEHOLDER_RE = re.compile(r"\{(\d+)\}")
NAME_PLACEHOLDER_RE = re.compile(r"\{(.+?)\}")
PRINTF_DIRECTIVE_RE = re.compile(r"%([sdifjoOc%])")


@dataclass(frozen=True)
class NoArgs:
    pass


@dataclass(frozen=True)
class SingleScalar:
    value: Any


@dataclass(frozen=True)
class SingleSequence:
    values: Sequence[Any]


@dataclass(frozen=True)
class SingleRecord:
    values: Mapping[str, Any]


@dataclass(frozen=True)
class MultiArgs:
    values: tuple[Any, ...]


CallForm = NoArgs | SingleScalar | SingleSequence | SingleRecord | MultiArgs


def classify_args(args: tuple[Any, ...]) -> CallForm:
    """Classify the substitution arguments of a render call."""
    if not args:
        return NoArgs()
    if len(args) > 1:
        return MultiArgs(tuple(args))

    value = args[0]
    if isinstance(value, Mapping):
        return SingleRecord(value)
    if isinstance(value, Sequence) and not isinstance(value, str | bytes | bytearray):
        return SingleSequence(value)
    return SingleScalar(value)


def format_with_sequence(text: str, values: Sequence[Any]) -> str:
    """Replace ``{N}`` with ``values[N]``; out-of-range indexes stay literal."""

    def replace(match: re.Match[str]) -> str:
        index = int(match.group(1))
        if index < len(values):
            return str(values[index])
        return match.group(0)

    return INDEX_PLACEHOLDER_RE.sub(replace, text)


def _is_substitutable(value: Any) -> bool:
    # Booleans, None and NaN never substitute; 0 and "" do.
    if value is None or isinstance(value, bool):
        return False
    if isinstance(value, numbers.Number) and value != value:
        return False
    if value:
        return True
    return (isinstance(value, numbers.Number) and value == 0) or value == ""


def format_with_mapping(text: str, values: Mapping[str, Any]) -> str:
    """Replace ``{name}`` with ``values[name]``; unmatched names stay literal."""

    def replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        if _is_substitutable(value):
            return str(value)
        return match.group(0)

    return NAME_PLACEHOLDER_RE.sub(replace, text)


def _coerce_number(value: Any) -> int | float | None:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int | float):
        return value
    if isinstance(value, numbers.Real):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            return None
    return None


def _format_integer(value: Any) -> str:
    number = _coerce_number(value)
    if number is None:
        return "NaN"
    if isinstance(number, float) and not math.isfinite(number):
        return str(number)
    return str(int(number))


def _format_float(value: Any) -> str:
    number = _coerce_number(value)
    if number is None:
        return "NaN"
    return str(float(number))


def _format_json(value: Any) -> str:
    try:
        return json.dumps(value, separators=(",", ":"), default=str)
    except ValueError:
        return "[Circular]"


_PRINTF_CONVERTERS = {
    "s": str,
    "d": _format_integer,
    "i": _format_integer,
    "f": _format_float,
    "j": _format_json,
    "o": repr,
    "O": repr,
    "c": lambda value: "",
}


def format_printf(text: str, args: Sequence[Any]) -> str:
    """printf-style formatting that never raises.

    Directives consume arguments in order. Directives left without an
    argument stay literal, ``%%`` becomes ``%``, and arguments left
    over are appended separated by spaces.
    """
    position = 0

    def replace(match: re.Match[str]) -> str:
        nonlocal position
        directive = match.group(1)
        if directive == "%":
            return "%"
        if position >= len(args):
            return match.group(0)
        value = args[position]
        position += 1
        return _PRINTF_CONVERTERS[directive](value)

    result = PRINTF_DIRECTIVE_RE.sub(replace, text)
    extra = args[position:]
    if extra:
        result = " ".join(
            [result, *(v if isinstance(v, str) else repr(v) for v in extra)]
        )
    return result


def substitute(text: str, form: CallForm) -> str:
    """Apply the substitution strategy for ``form`` to ``text``."""
    if isinstance(form, NoArgs):
        return text
    if isinstance(form, SingleSequence):
        return format_with_sequence(text, form.values)
    if isinstance(form, SingleRecord):
        return format_with_mapping(text, form.values)
    if isinstance(form, SingleScalar):
        return format_printf(text, (form.value,))
    return format_printf(text, form.values)


class MessageRenderer:
    """Renders message keys against a resource mapping."""

    def render(
        self,
        resource: Mapping[str, str] | None,
        key: str,
        *args: Any,
        locale: str | None = None,
    ) -> str:
        """Render ``key`` with optional substitution arguments.

        A key missing from ``resource`` is rendered as the key itself.

        Args:
            resource: key -> template mapping for the locale (None means empty)
            key: Message key
            *args: Substitution arguments (see module docstring)
            locale: Locale of ``resource``, for logging only

        Returns:
            The rendered text, "" when the template is empty.
        """
        text = resource.get(key) if resource else None
        if text is None:
            text = key

        logger.debug("message_rendered", locale=locale, key=key, text=text)
        if not text:
            return ""

        return substitute(text, classify_args(args))
