"""
Optionparser faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for all user-facing issues
  (errors and warnings). Codes are grouped by domain to keep copy consistent
  and make logs/searches predictable.
- ParserException / ParserWarning: base types that carry message + options and
  know how to render themselves in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface any fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

Taxonomy
- declaration time: UnparseableSyntaxError, InconsistentGrammarError
  (always raised from OptionParser.on, before any parsing begins).
- parse time: InvalidOptionError, ValueNeededError (abort the scan in progress).
- value time: ValueConversionError (raised by Value conversions inside callbacks).
- warnings: IgnoredValueWarning (a flag written with an attached '=value').

Integration
- OptionParser.trigger(fault) merges the parser's runtime options (prog, shell,
  fancy, colorful) and calls trigger(fault, **options).
- In non-shell mode, exceptions are raised; in shell mode, they are rendered via rich
  on stderr and the process exits with status 1.
"""
import inspect
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping (by high-level domain)
    - declarations (1110x)
      • UNPARSEABLE_SYNTAX, INCONSISTENT_GRAMMAR
    - scanning (1111x)
      • INVALID_OPTION, VALUE_NEEDED
    - values (1112x)
      • VALUE_CONVERSION
    - warnings (1211x)
      • IGNORED_VALUE

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- declaration errors (11xxx) ---
    UNPARSEABLE_SYNTAX   = 11101
    INCONSISTENT_GRAMMAR = 11102

    # --- scanning errors (11xxx) ---
    INVALID_OPTION       = 11111
    VALUE_NEEDED         = 11112

    # --- value errors (11xxx) ---
    VALUE_CONVERSION     = 11121

    # --- warnings (12xxx) ---
    IGNORED_VALUE        = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _renderer(fault, palette):
    """
    build the (header, message, hint) trio shared by exceptions and warnings.
    """
    main = __import__("__main__")
    options = fault.options
    colorful = options.get("colorful", False)

    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = text(options.get("prog") or getattr(main, "__prog__", "optionparser"), styler("prog-name"))
    code = options.get("code")

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
        " | ",
        text(str(options.get("title", type(fault).__name__)).title(), styler("title")),
        " ]"
    )
    message = text(fault.message, styler("message"))
    if hint := options.get("hint"):
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint")))
    else:
        hint = Text("")

    if options.get("fancy", False):
        width = console.width - 4
        return Panel(Group(message, hint), title=header, title_align="left", width=width)

    return Group(header, message, hint)


class ParserException(Exception):
    """
    base type for every fault raised by the declaration compiler and the scanner.

    attributes
    - message: one lowercased sentence describing what went wrong.
    - options: read-only mapping of context (title, code, hint, token, ...).
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # expose context such as .token or .option as plain attributes
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title

            # body
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UnparseableSyntaxError(ParserException): ...
class InconsistentGrammarError(ParserException): ...
class InvalidOptionError(ParserException): ...
class ValueNeededError(ParserException): ...
class ValueConversionError(ParserException, ValueError): ...


class ParserWarning(Warning):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        return _renderer(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        })

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=len(inspect.stack()))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class IgnoredValueWarning(ParserWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via rich console; otherwise, exceptions are raised
      and warnings are emitted through the warnings module.

    typical options
    - prog, shell, fancy, colorful, title, code, hint, and any other context the
      reporter may want to show (e.g., token/option/value).
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None (renderers treat docs as optional).
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ParserException",
    "UnparseableSyntaxError",
    "InconsistentGrammarError",
    "InvalidOptionError",
    "ValueNeededError",
    "ValueConversionError",
    "ParserWarning",
    "IgnoredValueWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)
