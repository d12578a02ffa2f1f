"""
OptionParser: the public facade.

    >>> parser = OptionParser(prog="demo", banner="demo - does things")
    >>> parser.on(("-v", "--verbose"), "be chatty", lambda: print("verbose"))
    >>> @parser.on(("-o?", "--out=?"), "write output there")
    ... def out(value):
    ...     print("out:", value)
    >>> parser.parse(["-v", "--out=a.txt", "input.txt"])
    verbose
    out: a.txt
    ['input.txt']

Registration
- on(tokens, descr, callback) compiles a declaration and appends it to the
  registry; without a callback it returns a decorator.
- on_unknown_option(predicate) decides whether an unknown option is fatal
  (True) or skipped (False); unknown options are fatal when no predicate is set.
- stop_if(predicate) adds a predicate that, once true, turns every remaining
  token into a positional argument.

Default help
- "-h", "-?" and "--help" print the help text and exit with status 0. With
  exit=False the help is printed, parser.helped is set and the rest of the
  arguments are left positional. help=False disables the declaration.

Faults
- declaration errors raise from on() immediately.
- parse errors go through trigger(): raised by default; in shell mode they are
  printed on stderr and the process exits with status 1.
"""
import logging
import os
import shlex
import sys

from rich.console import Console
from rich.panel import Panel

from .declarations import Registry, compile
from .faults import trigger
from .help import render
from .scanner import Scanner
from .utils import Unset, coalesce, mirror

logger = logging.getLogger(__name__)


class OptionParser:
    """
    Declarative command-line option parser.

    Parameters (keyword-only)
    - prog: program name for usage and faults; defaults to __prog__ in
      __main__, then to the basename of sys.argv[0].
    - banner / tail: text printed before / after the option summary.
    - padsize: column the option descriptions are aligned to.
    - help: register the default -h/-?/--help declaration.
    - exit: exit after printing the default help (otherwise stop scanning).
    - shell: print faults on stderr and exit with status 1 instead of raising.
    - colorful / fancy: styled output / panel output for help and faults.
    """
    __introspectable__ = ("prog", "banner", "tail", "padsize", "exit", "shell", "colorful", "fancy")

    stop_predicates = mirror("stop_predicates")
    unknown_option_predicate = mirror("unknown_option_predicate")

    def __init__(
        self,
        *,
        prog=Unset,
        banner="",
        tail="",
        padsize=50,
        help=True,
        exit=True,
        shell=False,
        colorful=False,
        fancy=False,
    ):
        if not isinstance(prog, str | Unset):
            raise TypeError("OptionParser() prog must be a string")
        if not isinstance(banner, str):
            raise TypeError("OptionParser() banner must be a string")
        if not isinstance(tail, str):
            raise TypeError("OptionParser() tail must be a string")
        if not isinstance(padsize, int) or isinstance(padsize, bool):
            raise TypeError("OptionParser() padsize must be an integer")
        if padsize < 0:
            raise ValueError("OptionParser() padsize must be non-negative")

        self._prog = prog
        self.banner = banner
        self.tail = tail
        self.padsize = padsize
        self.exit = bool(exit)
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.fancy = bool(fancy)
        self.helped = False

        self._registry = Registry()
        self._stop_predicates = []
        self._unknown_option_predicate = None
        self._positional = []
        self._scanner = None

        if help:
            self.on(("-h", "-?", "--help"), "show this help", self._helper)

    @property
    def prog(self):
        if self._prog is not Unset:
            return self._prog
        try:
            return getattr(__import__("__main__"), "__prog__")
        except AttributeError:
            return os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""

    @property
    def declarations(self):
        return self._registry

    def _helper(self):
        self.help()
        if self.exit:
            sys.exit(0)
        logger.debug("help printed, stopping the scan")
        self.helped = True
        if self._scanner is not None:
            self._scanner.stop()

    def on(self, tokens, descr="", callback=Unset, /):
        """
        Register an option.

        Parameters
        - tokens: one grammar token ("-v") or several (("-o?", "--out=?")).
        - descr: description shown in the help text.
        - callback: zero-argument callable for flags, one-argument callable
          (receiving a Value) for value options.

        Returns
        - the compiled Declaration, or a decorator when callback is omitted
          (the decorator registers the function and returns it unchanged).
        """
        if callback is Unset:
            def decorator(callback):
                self.on(tokens, descr, callback)
                return callback

            return decorator

        declaration = self._registry.add(compile(tokens, descr, callback))
        logger.debug("registered %r", declaration.tokens)
        return declaration

    def on_unknown_option(self, predicate, /):
        if not callable(predicate):
            raise TypeError("on_unknown_option() argument must be callable")
        self._unknown_option_predicate = predicate
        return predicate

    def stop_if(self, predicate, /):
        if not callable(predicate):
            raise TypeError("stop_if() argument must be callable")
        self._stop_predicates.append(predicate)
        return predicate

    def parse(self, args, /):
        """
        Scan an argument list (without the program name) or a shell-like string.

        Callbacks fire in input order; the positional arguments are returned
        and also kept on the parser (positional, size(), len(), indexing).
        """
        if isinstance(args, str):
            args = shlex.split(args)
        scanner = Scanner(self, args)

        self.helped = False
        self._scanner = scanner
        try:
            scanner.run()
        finally:
            self._scanner = None
            self._positional = scanner.positional

        logger.debug("positional arguments: %r", scanner.positional)
        return list(scanner.positional)

    def parse_argv(self, argv=Unset, /, begin=1):
        """
        Scan a full process argument vector (sys.argv by default), skipping
        the first `begin` elements.
        """
        if not isinstance(begin, int) or begin < 0:
            raise TypeError("parse_argv() begin must be a non-negative integer")
        return self.parse(list(coalesce(argv, sys.argv))[begin:])

    @property
    def positional(self):
        return list(self._positional)

    def size(self):
        return len(self._positional)

    def __len__(self):
        return len(self._positional)

    def __getitem__(self, index):
        return self._positional[index]

    def __iter__(self):
        return iter(self._positional)

    def format_help(self):
        return render(self).plain

    def help(self, file=None):
        """
        Print the help text to file (standard output by default).
        """
        console = Console(file=file)
        renderable = render(self)
        if self.fancy:
            renderable = Panel(renderable, title=self.prog or None, title_align="left", width=console.width - 4)
        console.print(renderable, soft_wrap=not self.fancy)

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options, prog=self.prog, shell=self.shell, fancy=self.fancy, colorful=self.colorful)

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return f"parser({', '.join('%s=%r' % item for item in self.__rich_repr__())})"


__all__ = (
    "OptionParser",
)
