"""
Help rendering.

    banner                                  (optional)
    usage: prog [-v] [-o<val>] [--dry-run] <args ...>

    available options:
      -v --verbose:                                   be chatty
      -o<val> --out=<val>, /out:<val>:                write output there
      --dry-run:                                      do nothing
    tail                                    (optional)

Every line is a rich Text; styles are applied only when the parser is
colorful. The palette can be overridden with a __styles__ mapping in __main__.
"""
from collections import defaultdict

from rich.text import Text

from .grammar import Style

PALETTE = {
    "banner": "bold #E6E6F0",
    "usage-label": "bold #00E6FF",
    "program-name": "bold #FF4D94",
    "usage-section": "bold #36C5F0",
    "section-label": "bold #FFFFFF",
    "option-name": "bold #00E6FF",
    "flag-name": "bold #22C55E",
    "metavar": "bold #FFD600",
    "description": "#9CA3AF",
    "tail": "#737373",
}


def _styler(colorful):
    styles = defaultdict(str, PALETTE | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    return styler


def _plain(style):
    return ""


def _shorts(declaration, styler):
    style = styler("option-name" if declaration.needs_value else "flag-name")
    return [
        Text.assemble(("-" + name, style), ("<val>", styler("metavar")) if declaration.needs_value else "")
        for name in declaration.shorts
    ]


def _longs(declaration, styler):
    style = styler("option-name" if declaration.needs_value else "flag-name")
    longs = []
    for name, kind in declaration.longs:
        match kind:
            case Style.GNU:
                prefix, marker = "--", "="
            case Style.DOS:
                prefix, marker = "/", ":"
        longs.append(Text.assemble((prefix + name, style), (marker + "<val>", styler("metavar")) if declaration.needs_value else ""))
    return longs


def describe(declaration, padsize=50, *, styler=_plain):
    """
    One help line for a declaration.

    The spellings are indented by two spaces and followed by a colon, then the
    line is padded with spaces up to padsize columns (always at least one) and
    the description follows.
    """
    shorts = Text(" ").join(_shorts(declaration, styler))
    longs = Text(", ").join(_longs(declaration, styler))
    line = Text.assemble("  ", Text(" ").join(part for part in (shorts, longs) if part), ":")
    line.append(" " * max(padsize - len(line), 1))
    line.append(declaration.descr, styler("description"))
    return line


def usage(parser, *, styler=_plain):
    """
    The usage line: one bracketed group per declaration and a trailing '<args ...>'.

    Declarations with short spellings show those; long-only ones show their
    first long spelling.
    """
    groups = []
    for declaration in parser.declarations:
        if declaration.inert:
            continue
        spellings = _shorts(declaration, styler) or _longs(declaration, styler)[:1]
        groups.append(Text.assemble("[", Text(" ").join(spellings), "]"))

    line = Text.assemble(("usage", styler("usage-label")), ": ")
    if parser.prog:
        line.append(parser.prog, styler("program-name"))
        line.append(" ")
    if groups:
        line.append_text(Text(" ").join(groups))
        line.append(" ")
    line.append("<args ...>", styler("usage-section"))
    return line


def render(parser):
    """
    Full help text for a parser, as a single rich Text.
    """
    styler = _styler(parser.colorful)

    lines = []
    if parser.banner:
        lines.append(Text(parser.banner, styler("banner")))
    lines.append(usage(parser, styler=styler))
    lines.append(Text(""))
    lines.append(Text("available options:", styler("section-label")))
    lines.extend(describe(declaration, parser.padsize, styler=styler) for declaration in parser.declarations if not declaration.inert)
    if parser.tail:
        lines.append(Text(parser.tail, styler("tail")))
    return Text("\n").join(lines)


__all__ = (
    "describe",
    "usage",
    "render",
)
