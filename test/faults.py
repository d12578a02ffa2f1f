"""
Fault tests: codes, context, rendering and shell-mode triggering.

Conventions
- Test method names follow CamelCase per project convention.
- Rich output is captured with Console(file=io.StringIO(), color_system=None).
"""
import io
import sys
import unittest
import warnings
from unittest import TestCase, mock

from rich.console import Console

from optionparser import faults
from optionparser.faults import (
    FaultCode,
    IgnoredValueWarning,
    InvalidOptionError,
    ParserException,
    ValueConversionError,
    getdoc,
    trigger,
)


def render(renderable) -> str:
    console = Console(file=io.StringIO(), color_system=None, width=120)
    console.print(renderable)
    return console.file.getvalue()


class FaultTest(TestCase):
    """Exceptions carry context and render themselves."""

    def setUp(self) -> None:
        self.fault = InvalidOptionError(
            "invalid option '--bogus'",
            title="invalid option",
            code=FaultCode.INVALID_OPTION,
            hint="try 'demo --help' to see all available options",
            token="--bogus",
            prog="demo",
        )

    def testContext(self) -> None:
        self.assertEqual(self.fault.message, "invalid option '--bogus'")
        self.assertEqual(str(self.fault), "invalid option '--bogus'")
        self.assertEqual(self.fault.token, "--bogus")
        self.assertIsInstance(self.fault, ParserException)
        with self.assertRaises(AttributeError):
            self.fault.missing  # NOQA: B-018

    def testOptionsAreReadOnly(self) -> None:
        with self.assertRaises(TypeError):
            self.fault.options["token"] = "--other"  # type: ignore[index]

    def testReplaceMergesOptions(self) -> None:
        replaced = self.fault.__replace__(shell=True, token="--other")
        self.assertIsInstance(replaced, InvalidOptionError)
        self.assertEqual(replaced.message, self.fault.message)
        self.assertEqual(replaced.token, "--other")
        self.assertTrue(replaced.options["shell"])
        self.assertEqual(self.fault.token, "--bogus")

    def testRendering(self) -> None:
        output = render(self.fault)
        self.assertIn("[ demo — 11111 | Invalid Option ]", output)
        self.assertIn("invalid option '--bogus'", output)
        self.assertIn("→ try 'demo --help'", output)

    def testFancyRenderingUsesAPanel(self) -> None:
        output = render(self.fault.__replace__(fancy=True))
        self.assertIn("Invalid Option", output)
        self.assertIn("╭", output)

    def testConversionErrorIsAValueError(self) -> None:
        self.assertTrue(issubclass(ValueConversionError, ValueError))


class TriggerTest(TestCase):
    """trigger() raises, warns, or prints and exits in shell mode."""

    def testRaisesOutsideShell(self) -> None:
        with self.assertRaises(InvalidOptionError):
            trigger(InvalidOptionError("invalid option '-x'", code=FaultCode.INVALID_OPTION))

    def testShellPrintsAndExits(self) -> None:
        console = Console(file=io.StringIO(), color_system=None, width=120)
        with mock.patch.object(faults, "console", console):
            with self.assertRaises(SystemExit) as context:
                trigger(
                    InvalidOptionError("invalid option '-x'", title="invalid option", code=FaultCode.INVALID_OPTION),
                    shell=True,
                    prog="demo",
                )
        self.assertEqual(context.exception.code, 1)
        self.assertIn("invalid option '-x'", console.file.getvalue())

    def testWarningsWarnOutsideShell(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            trigger(IgnoredValueWarning("flag '--verbose' does not take a value", code=FaultCode.IGNORED_VALUE))
        self.assertEqual(len(caught), 1)
        self.assertIsInstance(caught[0].message, IgnoredValueWarning)

    def testWarningContext(self) -> None:
        warning = IgnoredValueWarning("flag '--verbose' does not take a value", option="--verbose", value="yes")
        self.assertEqual(warning.option, "--verbose")
        self.assertEqual(warning.value, "yes")
        with self.assertRaises(AttributeError):
            warning.missing  # NOQA: B-018

    def testWarningsPrintInShell(self) -> None:
        console = Console(file=io.StringIO(), color_system=None, width=120)
        with mock.patch.object(faults, "console", console):
            trigger(IgnoredValueWarning("flag '--verbose' does not take a value", title="ignored value", code=FaultCode.IGNORED_VALUE), shell=True, prog="demo")
        self.assertIn("[ demo — 12111 | Ignored Value ]", console.file.getvalue())

    def testRejectsPlainObjects(self) -> None:
        with self.assertRaises(TypeError):
            trigger(ValueError("plain"))


class HostHooksTest(TestCase):
    """__codes__ and __docs__ mappings exposed by the host application."""

    def testNormalizeDefaultsToTheNumber(self) -> None:
        self.assertEqual(FaultCode.VALUE_NEEDED.normalize(), "11112")

    def testNormalizeHonoursCodes(self) -> None:
        with mock.patch.object(sys.modules["__main__"], "__codes__", {FaultCode.VALUE_NEEDED: "E-VALUE"}, create=True):
            self.assertEqual(FaultCode.VALUE_NEEDED.normalize(), "E-VALUE")

    def testGetdoc(self) -> None:
        self.assertIsNone(getdoc(FaultCode.INVALID_OPTION))
        with mock.patch.object(sys.modules["__main__"], "__docs__", {FaultCode.INVALID_OPTION: "see the manual"}, create=True):
            self.assertEqual(getdoc(FaultCode.INVALID_OPTION), "see the manual")

    def testGetdocRejectsOtherKeys(self) -> None:
        with self.assertRaises(TypeError):
            getdoc(11111)


if __name__ == "__main__":
    unittest.main()
