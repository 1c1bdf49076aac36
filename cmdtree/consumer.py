"""
cmdtree argument consumption.

eat_options(node, record, args) processes one node's window of arguments:
- tokens matching one of the node's own aliases are bound into the node's
  record immediately (flags become True, string options take the next token);
- every other token is kept, in order, as the residue;
- a terminal node then checks the residue against its parameter count and
  leaves it in args as its positional arguments;
- a node with subcommands requires the first residue token to name one of
  them, strips it, and returns its name so the caller can descend.

walk(tree, record, args) repeats that from the root until a terminal node.

The double-dash separator
- A literal "--" ends option recognition for the rest of the command line:
  tokens after it are never bound as options nor matched as subcommands.
- A node with subcommands keeps the separator in the arguments it hands down,
  so every descendant treats the tail literally too; a terminal node drops the
  separator and counts the tail toward its arity.

Bindings are eager, not transactional: when an input fault is raised, the
options recognized before it stay bound.
"""
import difflib
import logging
from typing import NamedTuple

from .faults import *
from .records import resolve
from .utils import *

logger = logging.getLogger(__name__)

SEPARATOR = "--"


class Dispatch(NamedTuple):
    """
    Outcome of a walk: the terminal node reached and its positional arguments.
    """
    node: object
    arguments: tuple[str, ...]
    helped: bool = False


def _missing_option_value(node, token):
    return MissingOptionValueError(
        "option %r expects a value but no argument follows it" % token,
        title="missing option value",
        code=FaultCode.MISSING_OPTION_VALUE,
        flag=token,
        node=node.path,
        hint="pass a value right after %r" % token,
        docs=getdoc(FaultCode.MISSING_OPTION_VALUE),
    )


def _wrong_arity(node, arguments):
    expected = node.parameter_count
    return WrongArityError(
        "expected %d %s but received %d" % (
            expected, pluralize("argument", expected), len(arguments)
        ),
        title="wrong number of arguments",
        code=FaultCode.WRONG_ARITY,
        expected=expected,
        received=len(arguments),
        arguments=tuple(arguments),
        node=node.path,
        hint=("remove the extra %s" if len(arguments) > expected else "add the missing %s") % pluralize(
            "argument", abs(len(arguments) - expected)
        ),
        docs=getdoc(FaultCode.WRONG_ARITY),
    )


def _missing_subcommand(node):
    choices = tuple(subcommand.name for subcommand in node.subcommands)
    return MissingSubcommandError(
        "a subcommand is required" + (" after %r" % node.path if node.path else ""),
        title="missing subcommand",
        code=FaultCode.MISSING_SUBCOMMAND,
        choices=choices,
        node=node.path,
        hint="choose one of: %s" % ", ".join(choices),
        docs=getdoc(FaultCode.MISSING_SUBCOMMAND),
    )


def _unknown_subcommand(node, given):
    choices = tuple(subcommand.name for subcommand in node.subcommands)
    suggestions = difflib.get_close_matches(given, choices, 5)
    try:
        hint = "did you mean %r? available %s: %s" % (
            suggestions[0], pluralize("subcommand", len(choices)), ", ".join(choices)
        )
    except IndexError:
        hint = "choose one of: %s" % ", ".join(choices)
    return UnknownSubcommandError(
        "unknown subcommand %r" % given,
        title="unknown subcommand",
        code=FaultCode.UNKNOWN_SUBCOMMAND,
        given=given,
        choices=choices,
        suggestions=tuple(suggestions),
        node=node.path,
        hint=hint,
        docs=getdoc(FaultCode.UNKNOWN_SUBCOMMAND),
    )


def eat_options(node, record, args, /):
    """
    Bind node's own options out of args and route to the next subcommand.

    Parameters
    - node: Node
      The resolved node whose window args is.
    - record: the root destination record (the node's own record is found
      through node.index_path).
    - args: list[str]
      Mutated in place. On return it holds the terminal node's positional
      arguments, or the arguments for the returned subcommand.

    Returns
    - str: the name of the subcommand to descend into, or "" for a terminal node.

    Raises
    - MissingOptionValueError: a string option is the last token (args is left untouched).
    - WrongArityError: a terminal node received the wrong number of positionals.
    - MissingSubcommandError: a node with subcommands received no residue.
    - UnknownSubcommandError: the first residue token names no subcommand.
    """
    target = resolve(record, node.index_path)
    residue = []
    tail = None

    index = 0
    length = len(args)
    while index < length:
        token = args[index]
        if token == SEPARATOR:
            tail = args[index + 1:]
            break

        option = node.lookup(token)
        if option is None:
            residue.append(token)
            index += 1
        elif not option.requires_argument:
            setattr(target, option.field_name, True)
            index += 1
        elif index + 1 >= length:
            raise _missing_option_value(node, token)
        else:
            setattr(target, option.field_name, args[index + 1])
            index += 2

    if node.terminal:
        args[:] = residue + coalesce(tail, [])
        if not node.unbounded and len(args) != node.parameter_count:
            raise _wrong_arity(node, args)
        logger.debug("node %r accepted %d positional argument(s)", node.path, len(args))
        return ""

    args[:] = residue + ([SEPARATOR, *tail] if tail is not None else [])
    if not residue:
        raise _missing_subcommand(node)

    for subcommand in node.subcommands:
        if residue[0] == subcommand.name:
            del args[0]
            logger.debug("node %r routes to subcommand %r", node.path, subcommand.name)
            return subcommand.name

    raise _unknown_subcommand(node, residue[0])


def descend(tree, node, name, /):
    """
    Return the node of tree reached from node through its subcommand name.
    """
    for subcommand in node.subcommands:
        if subcommand.name == name:
            return tree[subcommand.full_path]
    raise KeyError(name)


def walk(tree, record, args, /):
    """
    Consume args from the root of tree down to a terminal node.

    Parameters
    - tree: CommandTree
    - record: destination record (see CommandTree.record())
    - args: list[str], mutated in place; ends up holding the terminal node's
      positional arguments.

    Returns
    - Dispatch(node, arguments)

    Raises
    - CommandException: the first input fault met on the way; its "node"
      option names the command path that failed.
    """
    node = tree.root
    while name := eat_options(node, record, args):
        node = descend(tree, node, name)
    return Dispatch(node, tuple(args))


__all__ = (
    "SEPARATOR",
    "Dispatch",
    "eat_options",
    "descend",
    "walk",
)
