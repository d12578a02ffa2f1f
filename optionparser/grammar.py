r"""
Grammar classifier: the declaration mini-language.

Every option spelling is declared with a tiny token:

    | form       | example     | meaning                                     |
    |------------|-------------|---------------------------------------------|
    | -x         | -v          | short flag, no value                        |
    | -x?        | -o?         | short option requiring a value              |
    | --name     | --verbose   | GNU long flag, no value                     |
    | --name=?   | --out=?     | GNU long option requiring --out=VALUE       |
    | /name      | /verbose    | DOS-style flag, no value                    |
    | /name:?    | /out:?      | DOS-style option requiring /out:VALUE       |

classify(token) turns one such token into a Spelling (style, name and whether
a value is wanted), or raises UnparseableSyntaxError.

Alphanumerics
- isalphanum() accepts anything str.isalnum() accepts plus '?', '!' and '#',
  so the literal flag '-?' (and '/?') can be declared.
- '-?' is a flag, not "an option named '?' that wants a value": the value
  marker is only recognized when it is not the option letter itself, so
  '-??' is the same flag as '-?'.

DOS-style spellings are a secondary grammar: they are recognized here and
rendered in help, and the scanner never needs to know about them.
"""
from enum import Enum
from typing import NamedTuple

from .faults import FaultCode, UnparseableSyntaxError, getdoc


class Style(Enum):
    SHORT = "short"
    GNU = "gnu"
    DOS = "dos"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class Spelling(NamedTuple):
    """
    one classified grammar token.

    - token: the raw declaration token (e.g. "--out=?").
    - style: Style.SHORT, Style.GNU or Style.DOS.
    - name: the bare name ("o", "out").
    - wants_value: True when the token carried a value marker.
    """
    token: str
    style: Style
    name: str
    wants_value: bool


def isalphanum(char, /):
    """
    str.isalnum() widened with '?', '!' and '#' for flag-name purposes.
    """
    return len(char) == 1 and (char.isalnum() or char in "?!#")


def _unparseable(token, reason):
    return UnparseableSyntaxError(
        "unparseable option syntax %r (%s)" % (token, reason),
        title="unparseable syntax",
        code=FaultCode.UNPARSEABLE_SYNTAX,
        hint="use one of -x, -x?, --name, --name=?, /name or /name:?",
        token=token,
        docs=getdoc(FaultCode.UNPARSEABLE_SYNTAX),
    )


def _gnu(token):
    wants_value = token.endswith("=?")
    name = token[2:-2] if wants_value else token[2:]
    if not name:
        raise _unparseable(token, "long option has no name")
    return Spelling(token, Style.GNU, name, wants_value)


def _dos(token):
    wants_value = token.endswith(":?")
    name = token[1:-2] if wants_value else token[1:]
    if not name:
        raise _unparseable(token, "dos option has no name")
    return Spelling(token, Style.DOS, name, wants_value)


def _short(token):
    name = token[1]
    # the marker must not be the option letter itself ('-?' and '-??' are flags)
    marked = len(token) == 3 and token[2] == "?"
    wants_value = marked and name != "?"
    if len(token) > 2 and not marked:
        raise _unparseable(token, "short option can only be one character long")
    return Spelling(token, Style.SHORT, name, wants_value)


def classify(token, /):
    """
    Classify one declaration token.

    Rules (checked in order)
    - starts with '--'                         → GNU long option; marker '=?'
    - '/' followed by an alphanumeric          → DOS long option; marker ':?'
    - '-' followed by an alphanumeric          → short option;    marker '?'
    - anything else                            → UnparseableSyntaxError

    Returns
    - Spelling(token, style, name, wants_value)

    Raises
    - TypeError: token is not a string.
    - UnparseableSyntaxError: token matches none of the grammars, or its name
      comes out empty or (for short options) longer than one character.
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")

    if token.startswith("--"):
        return _gnu(token)
    if len(token) > 1 and token[0] == "/" and isalphanum(token[1]):
        return _dos(token)
    if len(token) > 1 and token[0] == "-" and isalphanum(token[1]):
        return _short(token)
    raise _unparseable(token, "matches none of the short, gnu or dos grammars")


__all__ = (
    "Style",
    "Spelling",
    "isalphanum",
    "classify",
)
