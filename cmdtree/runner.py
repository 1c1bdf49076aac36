"""
cmdtree runner: tokenize, walk, render help and surface faults in one call.

invoke(tree, prompt) is the convenience entry point for a program's main:

    from cmdtree import extract, invoke

    tree = extract(cli)

    if __name__ == "__main__":
        record, dispatch = invoke(tree, shell=True)
        match dispatch.node.path:
            case "serve":
                ...

Behavior
- consume each node's window from the root down (cmdtree.consumer.eat_options);
- where the walk stops (terminal node, or input fault), if a helper flag
  visible to that node (its own or a parent's) is set, print the node's help
  to stdout and return; "serve --help" therefore shows the help of serve;
- otherwise, on an input fault: in shell mode print the node's help and the
  fault to stderr and exit with status 1; otherwise raise the fault.
"""
import logging
import os.path
import shlex
import sys
from collections.abc import Iterable

from .consumer import Dispatch, eat_options, descend
from .faults import CommandException, trigger
from .helps import print_help
from .records import resolve
from .utils import *

logger = logging.getLogger(__name__)


def _tokenize(prompt):
    """
    Normalize a prompt into a fresh list of argument strings.

    - Unset: sys.argv[1:]
    - str: shell-style split (shlex.split)
    - Iterable[str]: used as-is
    """
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("invoke() prompt must be a string or an iterable of strings")
        return tokens
    raise TypeError("invoke() prompt must be a string or an iterable of strings")


def helped(node, record, /):
    """
    True when any helper flag visible to node (parent options included) is set.
    """
    for option in (*node.parent_options, *node.options):
        if option.helper and getattr(resolve(record, option.index_path), option.field_name, False):
            return True
    return False


def invoke(tree, prompt=Unset, /, *, record=Unset, prog=Unset, shell=False, fancy=False, colorful=False):
    """
    Parse a command line against tree.

    Parameters
    - tree: CommandTree
    - prompt: Unset | str | Iterable[str] (see _tokenize)
    - record: destination record; a fresh tree.record() when Unset.
    - prog: program name shown in help and faults; defaults to __prog__ in
      __main__, then to the basename of sys.argv[0].
    - shell, fancy, colorful: fault/help presentation flags.

    Returns
    - (record, Dispatch): the filled record and the terminal node reached
      with its positional arguments. When help was requested, Dispatch.helped
      is True and Dispatch.node is the node whose help was shown.

    Raises
    - CommandException: input faults, unless shell is True (then SystemExit).
    """
    prog = coalesce(prog, getattr(__import__("__main__"), "__prog__", os.path.basename(sys.argv[0])))
    args = _tokenize(prompt)
    record = tree.record() if record is Unset else record

    node = tree.root
    while True:
        try:
            name = eat_options(node, record, args)
        except CommandException as fault:
            if helped(node, record):
                print_help(node, prog, colorful=colorful, fancy=fancy)
                return record, Dispatch(node, tuple(args), helped=True)
            logger.debug("input fault at %r: %s", node.path, fault)
            if shell:
                print_help(node, prog, stderr=True, colorful=colorful, fancy=fancy)
            trigger(fault, prog=prog, shell=shell, fancy=fancy, colorful=colorful)
            raise  # unreachable: trigger() raises or exits

        if name:
            node = descend(tree, node, name)
            continue
        if helped(node, record):
            print_help(node, prog, colorful=colorful, fancy=fancy)
            return record, Dispatch(node, tuple(args), helped=True)
        logger.debug("dispatching %r with %d argument(s)", node.path, len(args))
        return record, Dispatch(node, tuple(args))


__all__ = (
    "invoke",
    "helped",
)
