"""
Value: the raw string handed to value-taking callbacks.

A Value *is* the raw string (it subclasses str and compares equal to it), so a
callback can store or print it directly. On top of that it carries the option
spelling that produced it and a handful of on-demand conversions; failures are
reported as ValueConversionError naming both.

    >>> parser.on(("-j?", "--jobs=?"), "parallel jobs", lambda value: print(value.as_int()))
"""
from .faults import FaultCode, ValueConversionError, getdoc
from .utils import Unset, coalesce

_TRUTHY = frozenset({"1", "true", "yes", "on", "y"})
_FALSY = frozenset({"0", "false", "no", "off", "n"})


class Value(str):
    """
    raw option value with conversion helpers.

    attributes
    - option: the spelling the value was attached to ("-o", "--out"), or None.

    conversions
    - as_int(base=10), as_float(), as_bool(), as_list(separator=",")
    """

    def __new__(cls, raw, /, option=Unset):
        if not isinstance(raw, str):
            raise TypeError("Value() argument must be a string")
        self = super().__new__(cls, raw)
        self.option = coalesce(option)
        return self

    def __repr__(self):
        return f"Value({str(self)!r}, option={self.option!r})"

    def _fail(self, kind):
        subject = "value %r" % str(self) if self.option is None else "value %r for %r" % (str(self), self.option)
        return ValueConversionError(
            "%s is not a valid %s" % (subject, kind),
            title="invalid value",
            code=FaultCode.VALUE_CONVERSION,
            hint="pass a %s value" % kind,
            option=self.option,
            value=str(self),
            docs=getdoc(FaultCode.VALUE_CONVERSION),
        )

    def as_int(self, base=10):
        try:
            return int(self, base)
        except ValueError:
            raise self._fail("integer") from None

    def as_float(self):
        try:
            return float(self)
        except ValueError:
            raise self._fail("number") from None

    def as_bool(self):
        """
        interpret 1/true/yes/on/y and 0/false/no/off/n (case-insensitive, trimmed).
        """
        match self.strip().lower():
            case word if word in _TRUTHY:
                return True
            case word if word in _FALSY:
                return False
            case _:
                raise self._fail("boolean")

    def as_list(self, separator=","):
        """
        split on separator, dropping empty items; each item stays a Value.
        """
        return tuple(type(self)(item, option=self.option) for item in self.split(separator) if item)


__all__ = (
    "Value",
)
