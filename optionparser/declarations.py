"""
Declaration compiler and registry.

Overview
- Callbacks
  • FlagCallback: wraps a zero-argument callable (flags such as -v/--verbose).
  • ValueCallback: wraps a one-argument callable receiving a Value (-o?/--out=?).
  Both are sealed; a Declaration holds exactly one of them and the scanner
  dispatches with a match on the variant, so the wrong arm is never called.

- Declaration
  • One logical option, addressable by several short and/or long spellings.
  • Immutable once compiled; fields are exposed through read-only properties.

- compile(tokens, descr, callback)
  • Classifies every grammar token (see grammar.classify), checks that all
    spellings agree on whether a value is required, resolves the callback
    shape from its signature and returns a Declaration.

- Registry
  • Ordered collection of Declarations with first-match lookups by short
    character or long name (linear scans).

Consistency rules (fail fast, at registration time)
- Short spellings must agree among themselves, long spellings must agree among
  themselves, and when both kinds are present the two sides must agree.
- A value-taking declaration needs a callback that accepts one argument; a
  flag needs one that accepts none.
"""
import functools
import inspect
import logging
import operator
from typing import NamedTuple

from .faults import FaultCode, InconsistentGrammarError, getdoc
from .grammar import Style, classify
from .utils import mirror

logger = logging.getLogger(__name__)


class FlagCallback:
    """
    no-value arm of the callback variant.
    """
    __slots__ = ("function",)
    __match_args__ = ("function",)

    def __init__(self, function, /):
        if not callable(function):
            raise TypeError("FlagCallback() argument must be callable")
        self.function = function

    def __call__(self):
        return self.function()

    def __repr__(self):
        return f"{type(self).__name__}({self.function!r})"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'FlagCallback' is not an acceptable base type")


class ValueCallback:
    """
    with-value arm of the callback variant.
    """
    __slots__ = ("function",)
    __match_args__ = ("function",)

    def __init__(self, function, /):
        if not callable(function):
            raise TypeError("ValueCallback() argument must be callable")
        self.function = function

    def __call__(self, value, /):
        return self.function(value)

    def __repr__(self):
        return f"{type(self).__name__}({self.function!r})"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'ValueCallback' is not an acceptable base type")


class LongName(NamedTuple):
    name: str
    style: Style


class Declaration:
    """
    One registered option.

    Properties (read-only)
    - tokens: the raw grammar tokens, as declared.
    - shorts: tuple of single characters, declaration order.
    - longs: tuple of LongName(name, style), declaration order.
    - needs_value: whether the option takes a value.
    - descr: description used by help rendering.
    - callback: FlagCallback or ValueCallback.

    Declarations are built by compile(); assigning attributes afterwards
    raises AttributeError.
    """
    __slots__ = ("_tokens", "_shorts", "_longs", "_needs_value", "_descr", "_callback")
    __introspectable__ = ("tokens", "shorts", "longs", "needs_value", "descr", "callback")

    tokens = mirror("tokens")
    shorts = mirror("shorts")
    longs = mirror("longs")
    needs_value = mirror("needs_value")
    descr = mirror("descr")
    callback = mirror("callback")

    def __init__(self, tokens, shorts, longs, needs_value, descr, callback):
        for name, value in (
            ("tokens", tuple(tokens)),
            ("shorts", tuple(shorts)),
            ("longs", tuple(longs)),
            ("needs_value", bool(needs_value)),
            ("descr", descr),
            ("callback", callback),
        ):
            object.__setattr__(self, "_" + name, value)

    def __setattr__(self, name, value, /):
        raise AttributeError("declaration is read-only")

    def __delattr__(self, name, /):
        raise AttributeError("declaration is read-only")

    @property
    def inert(self):
        """
        True for a declaration without spellings (it never matches).
        """
        return not self._shorts and not self._longs

    def matches_short(self, char, /):
        return char in self._shorts

    def matches_long(self, name, /):
        return any(long.name == name for long in self._longs)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"declaration({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"


def _bindable(signature, /, *args):
    try:
        signature.bind(*args)
    except TypeError:
        return False
    return True


def _variant(callback, needs_value, tokens):
    """
    Resolve the callback arm from its signature and check it against the grammar.

    - already a FlagCallback / ValueCallback → used as-is
    - bindable with zero arguments only     → FlagCallback
    - bindable with one argument only       → ValueCallback
    - bindable both ways (e.g. *args)       → decided by the grammar
    - signature not inspectable             → decided by the grammar
    """
    if isinstance(callback, FlagCallback | ValueCallback):
        variant = callback
    elif not callable(callback):
        raise TypeError("on() callback must be callable")
    else:
        try:
            signature = inspect.signature(callback)
        except (TypeError, ValueError):
            flagged, valued = not needs_value, needs_value
        else:
            flagged, valued = _bindable(signature), _bindable(signature, "")

        if flagged and valued:
            variant = (ValueCallback if needs_value else FlagCallback)(callback)
        elif valued:
            variant = ValueCallback(callback)
        elif flagged:
            variant = FlagCallback(callback)
        else:
            raise TypeError("on() callback must accept zero or one positional argument")

    # inert declarations never fire, any arm will do
    if tokens and isinstance(variant, ValueCallback) is not needs_value:
        if needs_value:
            raise TypeError("on() callback for %s must accept the option value" % ", ".join(map(repr, tokens)))
        raise TypeError("on() callback for %s must not require an argument" % ", ".join(map(repr, tokens)))
    return variant


def _inconsistent(message, side, tokens):
    return InconsistentGrammarError(
        message,
        title="inconsistent grammar",
        code=FaultCode.INCONSISTENT_GRAMMAR,
        hint="mark every spelling with a value marker (-x?, --name=?, /name:?) or none of them",
        side=side,
        tokens=tokens,
        docs=getdoc(FaultCode.INCONSISTENT_GRAMMAR),
    )


def compile(tokens, descr, callback, /):
    """
    Compile grammar tokens, a description and a callback into a Declaration.

    Parameters
    - tokens: str | Iterable[str]
      One grammar token or several (e.g. ("-o?", "--out=?", "/out:?")). An empty
      collection yields an inert declaration that never matches.
    - descr: str
      Free text for help rendering.
    - callback: Callable | FlagCallback | ValueCallback
      Invoked when the option is seen (see _variant for shape resolution).

    Returns
    - Declaration

    Raises
    - UnparseableSyntaxError: a token matches none of the grammars.
    - InconsistentGrammarError: spellings disagree on whether a value is required.
    - TypeError: bad argument types, or a callback shape that does not fit.
    """
    if isinstance(tokens, str):
        tokens = (tokens,)
    tokens = tuple(tokens)
    if not isinstance(descr, str):
        raise TypeError("on() description must be a string")

    shorts = []
    longs = []
    marked = {"short": [], "long": []}
    unmarked = {"short": [], "long": []}

    for spelling in map(classify, tokens):
        if spelling.style is Style.SHORT:
            side = "short"
            if spelling.name not in shorts:
                shorts.append(spelling.name)
        else:
            side = "long"
            if (long := LongName(spelling.name, spelling.style)) not in longs:
                longs.append(long)
        (marked if spelling.wants_value else unmarked)[side].append(spelling.token)

    for side in ("short", "long"):
        if marked[side] and unmarked[side]:
            raise _inconsistent(
                "%s option %r wants a value, but %s option %r does not" % (
                    side, marked[side][0], side, unmarked[side][0]
                ),
                side,
                tokens,
            )

    long_wants_value = bool(marked["long"])
    short_wants_value = bool(marked["short"])

    if shorts and longs and long_wants_value != short_wants_value:
        if long_wants_value:
            message = "long option %r wants a value, but short option %r does not" % (
                marked["long"][0], unmarked["short"][0]
            )
            side = "long"
        else:
            message = "short option %r wants a value, but long option %r does not" % (
                marked["short"][0], unmarked["long"][0]
            )
            side = "short"
        raise _inconsistent(message, side, tokens)

    needs_value = long_wants_value or short_wants_value

    declaration = Declaration(tokens, shorts, longs, needs_value, descr, _variant(callback, needs_value, tokens))
    logger.debug("compiled %r", declaration)
    return declaration


class Registry:
    """
    Ordered collection of Declarations.

    Lookups are linear and first-match-wins; spellings are not expected to
    collide across declarations.
    """

    def __init__(self):
        self._declarations = []

    def add(self, declaration, /):
        if not isinstance(declaration, Declaration):
            raise TypeError("Registry.add() argument must be a declaration")
        self._declarations.append(declaration)
        return declaration

    def find_short(self, char, /):
        for declaration in self._declarations:
            if declaration.matches_short(char):
                return declaration
        return None

    def find_long(self, name, /):
        for declaration in self._declarations:
            if declaration.matches_long(name):
                return declaration
        return None

    def __iter__(self):
        return iter(self._declarations)

    def __len__(self):
        return len(self._declarations)

    def __getitem__(self, index):
        return self._declarations[index]

    def __repr__(self):
        return f"registry({self._declarations!r})"


__all__ = (
    "FlagCallback",
    "ValueCallback",
    "LongName",
    "Declaration",
    "Registry",
)
