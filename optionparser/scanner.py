"""
Argument scanner/dispatcher.

A Scanner is created by OptionParser.parse for one argument vector and walks
it left to right exactly once. Every token goes to one handler, and each
handler returns how many tokens it consumed (1, or 2 when a simple short
option took the following token as its value):

    | token            | handler       | example                |
    |------------------|---------------|------------------------|
    | --name[=value]   | _long         | --out=a.txt, --verbose |
    | -xyz             | _bundle       | -vd, -ofile.txt        |
    | -x               | _short        | -o a.txt, -v           |
    | anything else    | _positional   | a.txt, -, ""           |

Before classification, every registered stop predicate is consulted; once the
scanner is stopped (by a predicate, by '--' or by the help option) all the
remaining tokens are positional. Faults are surfaced through the parser's
trigger(), so they raise by default and abort the scan; callbacks that already
fired are not rolled back.
"""
import difflib
import logging

from .declarations import FlagCallback, ValueCallback
from .faults import FaultCode, IgnoredValueWarning, InvalidOptionError, ValueNeededError, getdoc
from .values import Value
from .utils import Unset

logger = logging.getLogger(__name__)


class Scanner:
    """
    single-use scan state over one argument vector.

    attributes
    - parser: the owning OptionParser (its registry is read-only during the scan).
    - args: tuple of input tokens.
    - cursor: index of the current token.
    - positional: tokens not consumed as options or option values, in order.
    - stopped: once True, every remaining token is positional.
    """

    def __init__(self, parser, args, /):
        args = tuple(args)
        if not all(isinstance(arg, str) for arg in args):
            raise TypeError("Scanner() arguments must be strings")
        self.parser = parser
        self.args = args
        self.cursor = 0
        self.positional = []
        self.stopped = False

    @property
    def token(self):
        return self.args[self.cursor]

    def stop(self):
        self.stopped = True

    def run(self):
        """
        scan every token and return the positional list.
        """
        logger.debug("scanning %r", self.args)
        while self.cursor < len(self.args):
            self.cursor += self.step(self.token)
        return self.positional

    def step(self, token, /):
        for predicate in self.parser.stop_predicates:
            if predicate(self):
                if not self.stopped:
                    logger.debug("stop predicate %r fired at %r", predicate, token)
                self.stopped = True
                break

        if token == "--" and not self.stopped:
            logger.debug("end of options at position %d", self.cursor)
            self.stopped = True
            return 1

        if self.stopped:
            return self._positional(token)

        if token.startswith("--"):
            return self._long(token)
        if token.startswith("-") and len(token) > 2:
            return self._bundle(token)
        if token.startswith("-") and len(token) == 2:
            return self._short(token)
        return self._positional(token)

    def _positional(self, token):
        self.positional.append(token)
        return 1

    def _long(self, token):
        name, separator, raw = token[2:].partition("=")
        option = "--" + name

        if (declaration := self.parser.declarations.find_long(name)) is None:
            self._unknown(option, candidates=("--" + long.name for known in self.parser.declarations for long in known.longs))
            return 1

        if not declaration.needs_value:
            if separator:
                logger.debug("ignoring value %r given to flag %r", raw, option)
                self.parser.trigger(IgnoredValueWarning(
                    "flag %r does not take a value, %r was ignored" % (option, raw),
                    title="ignored value",
                    code=FaultCode.IGNORED_VALUE,
                    hint="remove everything from '=' (for example: %s)" % option,
                    option=option,
                    value=raw,
                    docs=getdoc(FaultCode.IGNORED_VALUE),
                ))
            self._fire(declaration, option)
            return 1

        if not separator:
            self._needed(option, "pass it inline (for example: %s=<val>)" % option)
            return 1

        self._fire(declaration, option, raw)
        return 1

    def _bundle(self, token):
        for index, char in enumerate(token[1:], 1):
            option = "-" + char

            if (declaration := self.parser.declarations.find_short(char)) is None:
                self._unknown(option, candidates=())
                logger.debug("abandoning bundle %r at %r", token, option)
                return 1

            if declaration.needs_value:
                if index == 1:
                    # the value consumes the rest of the token verbatim
                    self._fire(declaration, option, token[2:])
                    return 1
                self._needed(option, "put %s first in the bundle or pass it on its own (for example: %s<val>)" % (option, option), bundle=token)
                return 1

            self._fire(declaration, option)
            if self.stopped and (remainder := token[index + 1:]):
                # a callback stopped the scan: the unread characters stay positional
                self._positional("-" + remainder)
                break
        return 1

    def _short(self, token):
        if (declaration := self.parser.declarations.find_short(token[1])) is None:
            self._unknown(token, candidates=())
            return 1

        if not declaration.needs_value:
            self._fire(declaration, token)
            return 1

        following = self.cursor + 1
        if following < len(self.args) and not self.args[following].startswith("-"):
            self._fire(declaration, token, self.args[following])
            return 2

        self._needed(token, "pass the value after a space or attached (for example: %s <val> or %s<val>)" % (token, token))
        return 1

    def _fire(self, declaration, option, raw=Unset):
        logger.debug("dispatching %r%s", option, "" if raw is Unset else " with %r" % raw)
        match declaration.callback:
            case FlagCallback() as callback:
                callback()
            case ValueCallback() as callback:
                callback(Value(raw, option=option))

    def _unknown(self, token, *, candidates):
        """
        apply the unknown-option policy; returns only when the token is skipped.
        """
        predicate = self.parser.unknown_option_predicate
        if predicate is not None and not predicate(token):
            logger.debug("skipping unknown option %r", token)
            return

        suggestions = difflib.get_close_matches(token, list(candidates), 3)
        try:
            hint = "did you mean %r? you can also run '%s --help' to see all options" % (suggestions[0], self.parser.prog)
        except IndexError:
            hint = "try '%s --help' to see all available options" % self.parser.prog
        self.parser.trigger(InvalidOptionError(
            "invalid option %r" % token,
            title="invalid option",
            code=FaultCode.INVALID_OPTION,
            hint=hint,
            token=token,
            suggestions=suggestions,
            docs=getdoc(FaultCode.INVALID_OPTION),
        ))

    def _needed(self, option, hint, **context):
        self.parser.trigger(ValueNeededError(
            "option %r needs a value" % option,
            title="value needed",
            code=FaultCode.VALUE_NEEDED,
            hint=hint,
            option=option,
            docs=getdoc(FaultCode.VALUE_NEEDED),
            **context,
        ))


def stop_at_positional(scanner, /):
    """
    stop predicate: stop once one positional argument has been seen.

    everything after the first bare word is left untouched, which is how a
    parent parser hands the tail over to a sub-command.
    """
    return bool(scanner.positional)


__all__ = (
    "Scanner",
    "stop_at_positional",
)
