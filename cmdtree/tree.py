"""
cmdtree command-tree model.

What this module provides
- OptionEntry: one declared option as shown in help and bound by the consumer.
- SubcommandEntry: one direct subcommand of a node.
- Node: a fully resolved command (or subcommand) of the table.
- CommandTree: the flattened, read-only table mapping command paths to nodes.

Nodes are built once by cmdtree.extractor.extract and never mutated afterward;
every container they expose is a tuple or a MappingProxyType.
"""
from collections.abc import Mapping
from types import EllipsisType, MappingProxyType
from typing import NamedTuple

from . import consumer, helps
from .records import Record, resolve
from .utils import *


class OptionEntry(NamedTuple):
    display_name: str
    descr: str
    field_name: str
    requires_argument: bool
    default: object = None
    helper: bool = False
    # Field names from the root record down to the record owning this option.
    index_path: tuple[str, ...] = ()
    aliases: tuple[str, ...] = ()


class SubcommandEntry(NamedTuple):
    name: str
    descr: str
    field_name: str
    full_path: str


class Node(metaclass=ModelType):
    """
    A resolved command node.

    Fields
    - path: "" for the root, otherwise the space-joined names from the root.
    - index_path: field names locating this node's record in the root record.
    - option_index: alias -> field name of the bound option (this node only).
    - parameter_count: int, Ellipsis (unbounded) or Unset.
    - name, descr: display metadata.
    - subcommands: tuple[SubcommandEntry, ...] in declaration order.
    - options: tuple[OptionEntry, ...] declared directly on this node.
    - parent_options: tuple[OptionEntry, ...] of every strict ancestor, root first.
    """

    __introspectable__ = (
        "path",
        "index_path",
        "option_index",
        "parameter_count",
        "name",
        "descr",
        "subcommands",
        "options",
        "parent_options",
    )

    __displayable__ = (
        "path",
        "name",
        "parameter_count",
        "subcommands",
        "options",
    )

    def __init__(
            self,
            path,
            index_path,
            option_index,
            parameter_count,
            name,
            descr,
            subcommands,
            options,
            parent_options
    ):
        self._path = path
        self._index_path = tuple(index_path)
        self._option_index = MappingProxyType(dict(option_index))
        self._parameter_count = parameter_count
        self._name = name
        self._descr = descr
        self._subcommands = tuple(subcommands)
        self._options = tuple(options)
        self._parent_options = tuple(parent_options)
        self._fields = MappingProxyType({option.field_name: option for option in self._options})

    @property
    def terminal(self):
        """
        True when the node has no subcommands (arity applies).
        """
        return not self._subcommands

    @property
    def unbounded(self):
        return isinstance(self._parameter_count, EllipsisType)

    def lookup(self, alias, /):
        """
        Return the OptionEntry bound to alias, or None when it is not one of
        this node's own aliases.
        """
        try:
            return self._fields[self._option_index[alias]]
        except KeyError:
            return None

    def eat_options(self, record, args, /):
        """
        Shorthand for cmdtree.consumer.eat_options(self, record, args).
        """
        return consumer.eat_options(self, record, args)

    def render(self, prog, /, **options):
        """
        Shorthand for cmdtree.helps.render(self, prog, **options).
        """
        return helps.render(self, prog, **options)


class CommandTree(Mapping):
    """
    The command-tree table: a read-only mapping from command path to Node.

    The root is stored under the empty path. Iteration follows extraction
    order (depth-first, declaration order).
    """

    def __init__(self, nodes, /):
        self._nodes = MappingProxyType(dict(nodes))
        if "" not in self._nodes:
            raise ValueError("command tree requires a root node")

    def __getitem__(self, path, /):
        return self._nodes[path]

    def __iter__(self):
        return iter(self._nodes)

    def __len__(self):
        return len(self._nodes)

    @property
    def root(self):
        return self._nodes[""]

    def record(self):
        """
        Build a fresh destination record shaped like the description: one
        attribute per option (holding its default) and one nested Record per
        sub-node field.
        """
        root = Record()
        for node in self._nodes.values():
            current = resolve(root, node.index_path)
            for option in node.options:
                setattr(current, option.field_name, option.default)
            for subcommand in node.subcommands:
                setattr(current, subcommand.field_name, Record())
        return root

    def __repr__(self):
        return f"command-tree({list(self._nodes)!r})"


__all__ = (
    "OptionEntry",
    "SubcommandEntry",
    "Node",
    "CommandTree",
)
