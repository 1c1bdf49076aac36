r"""
cmdtree schema description builders.

Overview
- Info: the metadata field of a node (name, description, parameter count).
- Flag: a boolean option, presence-only (e.g., -h/--help).
- Option: a string option bound to the argument that follows it (e.g., -p/--port).
- Schema: one command node; keyword fields (in declaration order) are options,
  flags and nested Schema sub-nodes.

These objects only record what the author wrote. Every validation (aliases,
names, parameter counts, field kinds) happens once in cmdtree.extractor.extract
so that all author mistakes surface through a single contract, before any
parsing occurs.

Quick example:
    >>> from cmdtree import Schema, Info, Flag, Option
    >>> cli = Schema(
    ...     Info("thing", descr="hello"),
    ...     validate=Schema(Info("validate", params=1, descr="validate a file")),
    ...     serve=Schema(
    ...         Info("serve", params=0, descr="run the server"),
    ...         port=Option("-p", "--port", descr="port to bind"),
    ...     ),
    ...     help=Flag("-h", "--help", descr="Display this help message", helper=True),
    ...     log_level=Option("-l", "--log-level", descr="Set the log level", required=True),
    ... )

Public API
- Classes: Info, Flag, Option, Schema
"""
from .utils import *


class Info(metaclass=ModelType):
    """
    Metadata attached to a command node.

    Fields
    - name: Unset | str
      Subcommand name as typed on the command line. Required on every node but
      the root.
    - descr: Unset | str
      One-line description shown in help.
    - params: Unset | int | Ellipsis | "..."
      Number of positional arguments a terminal node takes. Ellipsis (or the
      literal "...") means unbounded. Nodes with subcommands ignore it.
    """

    __introspectable__ = (
        "name",
        "descr",
        "params",
    )

    def __init__(self, name=Unset, /, descr=Unset, params=Unset):
        self._name = name
        self._descr = descr
        self._params = params


class Flag(metaclass=ModelType):
    """
    Boolean option: False until one of its aliases occurs, True afterwards.

    Fields
    - names: tuple[str, ...] aliases, in declaration order.
    - descr: Unset | str
    - helper: bool
      Marks the flag that requests help; cmdtree.runner.invoke renders the
      current node's help when any visible helper flag is set.
    """

    __introspectable__ = (
        "names",
        "descr",
        "helper",
    )

    requires_argument = False

    def __init__(self, *names, descr=Unset, helper=False):
        self._names = names
        self._descr = descr
        self._helper = bool(helper)

    @property
    def default(self):
        return False


class Option(metaclass=ModelType):
    """
    String option: binds the argument following any of its aliases.

    Fields
    - names: tuple[str, ...] aliases, in declaration order.
    - descr: Unset | str
    - required: bool
      Storage shape only. A required option stores a plain string (default
      ""); an optional one stores a present-or-absent value (default None).
      Absence of either on the command line is not an error.
    - default: Unset | str | None
      Explicit initial value, overriding the shape-derived one.
    """

    __introspectable__ = (
        "names",
        "descr",
        "required",
        "default",
    )

    requires_argument = True
    helper = False

    def __init__(self, *names, descr=Unset, required=False, default=Unset):
        self._names = names
        self._descr = descr
        self._required = bool(required)
        self._default = coalesce(default, "" if required else None)


class Schema(metaclass=ModelType):
    """
    One command node of the description.

    Parameters
    - info: Unset | Info (positional-only)
      Metadata for this node. An Info passed as a keyword field is accepted too.
    - **fields: Flag | Option | Schema
      Options and sub-nodes, keyed by the field name they bind to in the
      destination record. Declaration order is preserved and drives help and
      subcommand ordering.
    """

    __introspectable__ = (
        "info",
        "fields",
    )

    def __init__(self, info=Unset, /, **fields):
        self._info = info
        self._fields = fields


__all__ = (
    "Info",
    "Flag",
    "Option",
    "Schema",
)
