"""
Grammar classifier tests.

Scope
- Each declaration form (-x, -x?, --name, --name=?, /name, /name:?) maps to
  the right style, name and value marker.
- The widened alphanumerics ('?', '!', '#') and the bare '-?' flag.
- Tokens matching none of the grammars raise UnparseableSyntaxError carrying
  the offending token.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from optionparser.faults import FaultCode, UnparseableSyntaxError
from optionparser.grammar import Spelling, Style, classify, isalphanum


class GrammarTest(TestCase):
    """Classification of single declaration tokens."""

    def testShortFlag(self) -> None:
        self.assertEqual(classify("-v"), Spelling("-v", Style.SHORT, "v", False))

    def testShortValue(self) -> None:
        self.assertEqual(classify("-o?"), Spelling("-o?", Style.SHORT, "o", True))

    def testQuestionMarkIsAFlag(self) -> None:
        """
        '-?' declares the literal flag, the marker is not the option letter itself.
        """
        spelling = classify("-?")
        self.assertEqual(spelling.name, "?")
        self.assertFalse(spelling.wants_value)

    def testDoubleQuestionMarkIsAFlag(self) -> None:
        self.assertEqual(classify("-??"), Spelling("-??", Style.SHORT, "?", False))

    def testWidenedShortNames(self) -> None:
        for token in ("-!", "-#", "-7"):
            with self.subTest(token=token):
                spelling = classify(token)
                self.assertIs(spelling.style, Style.SHORT)
                self.assertEqual(spelling.name, token[1])

    def testGnuFlag(self) -> None:
        self.assertEqual(classify("--verbose"), Spelling("--verbose", Style.GNU, "verbose", False))

    def testGnuValue(self) -> None:
        self.assertEqual(classify("--out=?"), Spelling("--out=?", Style.GNU, "out", True))

    def testGnuNameKeepsDashes(self) -> None:
        self.assertEqual(classify("--dry-run").name, "dry-run")

    def testDosFlag(self) -> None:
        self.assertEqual(classify("/verbose"), Spelling("/verbose", Style.DOS, "verbose", False))

    def testDosValue(self) -> None:
        self.assertEqual(classify("/out:?"), Spelling("/out:?", Style.DOS, "out", True))

    def testDosQuestionMark(self) -> None:
        self.assertEqual(classify("/?"), Spelling("/?", Style.DOS, "?", False))

    def testUnparseable(self) -> None:
        for token in ("-ab", "-ab?", "--", "--=?", "o", "/", "/-x", "", "-", "-+", "/:?"):
            with self.subTest(token=token):
                with self.assertRaises(UnparseableSyntaxError) as context:
                    classify(token)
                # the offending token travels with the fault
                self.assertEqual(context.exception.token, token)
                self.assertIs(context.exception.options["code"], FaultCode.UNPARSEABLE_SYNTAX)

    def testNonStringToken(self) -> None:
        with self.assertRaises(TypeError):
            classify(1)  # type: ignore[arg-type]


class AlphanumTest(TestCase):
    """The widened alphanumeric predicate."""

    def testAccepted(self) -> None:
        for char in ("a", "Z", "0", "é", "?", "!", "#"):
            with self.subTest(char=char):
                self.assertTrue(isalphanum(char))

    def testRejected(self) -> None:
        for char in ("-", "/", "=", ":", " ", "", "ab"):
            with self.subTest(char=char):
                self.assertFalse(isalphanum(char))


if __name__ == "__main__":
    unittest.main()
