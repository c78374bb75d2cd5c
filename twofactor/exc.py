"""twofactor.exc -- exceptions raised by twofactor"""

from __future__ import annotations

__all__ = [
    "MissingParameterError",
    "ExpectedTypeError",
    "ExpectedStringError",
    "type_name",
]


class MissingParameterError(TypeError):
    """
    Error raised when a required argument (e.g. ``secret_key``, ``counter``,
    or ``user_token``) was omitted, or passed as an empty value.

    .. attribute:: param

        name of the parameter that was missing.
    """

    def __init__(self, param: str, msg: str | None = None) -> None:
        self.param = param
        super().__init__(msg or "%s is required." % param)


# ------------------------------------------------------------------------
# error constructors
#
# these functions are used to construct the standard errors raised
# when a value has the wrong type.
# ------------------------------------------------------------------------
def type_name(value: object) -> str:
    """return pretty-printed string containing name of value's type"""
    cls = value.__class__
    if cls.__module__ and cls.__module__ not in ["__builtin__", "builtins"]:
        return "%s.%s" % (cls.__module__, cls.__name__)
    if value is None:
        return "None"
    return cls.__name__


def ExpectedTypeError(value: object, expected: str, param: str) -> TypeError:
    """error message when param was supplied wrong type"""
    name = type_name(value)
    return TypeError("%s must be %s, not %s" % (param, expected, name))


def ExpectedStringError(value: object, param: str) -> TypeError:
    """error message when param was supplied wrong type"""
    return ExpectedTypeError(value, "unicode or bytes", param)
