"""
cmdtree faults (schema errors, input errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every fault. Codes are
  grouped by tier so logs/searches stay predictable.
- SchemaError and subclasses: author mistakes detected once, at extraction.
  They are plain exceptions (ValueError/TypeError) and are never rendered for
  end users; they signal a programming error in the command description.
- CommandException and subclasses: end-user input mistakes detected per parse.
  They carry a message plus read-only structured options (offending flag,
  expected/received counts, offending token, …) and know how to render
  themselves through rich.
- trigger(): central entry point to surface an input fault (raise, or print and
  exit in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Integration
- Consumers raise input faults; the caller catches CommandException, decides
  whether to print help, and either retries or exits.
- Host applications customize rendering via __prog__, __styles__, __codes__
  and __docs__ defined in __main__.
"""
import copy
import sys
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
    canonical fault codes (stable identifiers).

    grouping
    - schema (21xxx): raised by extract(), never shown to end users
      • UNSUPPORTED_FIELD, DUPLICATE_INFO, MISSING_NAME, EMPTY_ALIAS,
        DUPLICATE_ALIAS, DUPLICATE_SUBCOMMAND, INVALID_PARAMETER_COUNT,
        MISSING_INFO, MISSING_PARAMETER_COUNT
    - routing (11101/11102)
      • MISSING_SUBCOMMAND, UNKNOWN_SUBCOMMAND
    - options (11117)
      • MISSING_OPTION_VALUE
    - positionals (11125)
      • WRONG_ARITY

    normalize() allows host remapping to custom labels while keeping codes stable.
    """
    # --- routing errors (11xxx) ---
    MISSING_SUBCOMMAND          = 11101
    UNKNOWN_SUBCOMMAND          = 11102

    # --- option errors (11xxx) ---
    MISSING_OPTION_VALUE        = 11117

    # --- positional errors (11xxx) ---
    WRONG_ARITY                 = 11125

    # --- schema errors (21xxx) ---
    UNSUPPORTED_FIELD           = 21101
    DUPLICATE_INFO              = 21102
    MISSING_NAME                = 21111
    EMPTY_ALIAS                 = 21112
    DUPLICATE_ALIAS             = 21113
    DUPLICATE_SUBCOMMAND        = 21114
    INVALID_PARAMETER_COUNT     = 21121
    MISSING_INFO                = 21122
    MISSING_PARAMETER_COUNT     = 21123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SchemaError(ValueError):
    """
    base class of every extraction failure (a mistake in the command description).
    """
    code = Unset

    def __init__(self, message, /, *, path=Unset, field=Unset):
        super().__init__(message)
        self.message = message
        self.path = path
        self.field = field


class UnsupportedFieldError(SchemaError, TypeError):
    code = FaultCode.UNSUPPORTED_FIELD
class DuplicateInfoError(SchemaError):
    code = FaultCode.DUPLICATE_INFO
class MissingNameError(SchemaError):
    code = FaultCode.MISSING_NAME
class EmptyAliasError(SchemaError):
    code = FaultCode.EMPTY_ALIAS
class DuplicateAliasError(SchemaError):
    code = FaultCode.DUPLICATE_ALIAS
class DuplicateSubcommandError(SchemaError):
    code = FaultCode.DUPLICATE_SUBCOMMAND
class InvalidParameterCountError(SchemaError):
    code = FaultCode.INVALID_PARAMETER_COUNT
class MissingInfoError(SchemaError):
    code = FaultCode.MISSING_INFO
class MissingParameterCountError(SchemaError):
    code = FaultCode.MISSING_PARAMETER_COUNT


class CommandException(Exception):
    """
    base class of every input fault raised while consuming arguments.

    options always carry at least: code, title, hint and node (the command
    path that failed). subclasses add their own structured detail.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",
            "code": "bold #00E5FF",
            "error-title": "bold #FF4DA6",

            # body
            "error-message": "#C8C8D0",
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
            "docs": "underline #00E5FF dim",
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", False)
        fancy = self.options.get("fancy", False)

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

        prog = text(getattr(main, "__prog__", self.options.get("prog", "")), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))
        body = [message, hint]
        if docs := self.options.get("docs"):
            body.append(text(docs, styler("docs")))

        if fancy:
            return Panel(Group(*body), title=header, title_align="left")

        return Group(header, *body)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MissingOptionValueError(CommandException): ...
class WrongArityError(CommandException): ...
class MissingSubcommandError(CommandException): ...
class UnknownSubcommandError(CommandException): ...


def trigger(fault, /, **options):
    """
    surface an input fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see CommandException).
    - options are merged into the fault via copy.replace(fault, **options) before triggering.
    - in shell mode, rendering happens via the rich console and the process exits;
      otherwise the (merged) exception is raised.

    typical options
    - prog, shell, fancy, colorful
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings; when
    not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "SchemaError",
    "UnsupportedFieldError",
    "DuplicateInfoError",
    "MissingNameError",
    "EmptyAliasError",
    "DuplicateAliasError",
    "DuplicateSubcommandError",
    "InvalidParameterCountError",
    "MissingInfoError",
    "MissingParameterCountError",
    "CommandException",
    "MissingOptionValueError",
    "WrongArityError",
    "MissingSubcommandError",
    "UnknownSubcommandError",
    "trigger",
    "getdoc",
)
