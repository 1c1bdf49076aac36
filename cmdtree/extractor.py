"""
cmdtree schema extraction.

extract(schema) walks a nested Schema description depth-first and produces the
command-tree table: one resolved Node per command/subcommand, keyed by its
space-joined command path (the root under "").

At each node
1. classify every field as info, option (Flag/Option) or sub-node (Schema);
   anything else is a schema error;
2. resolve the node's own options and alias index (every option declares at
   least one non-empty alias, aliases are unique within the node and never
   repeat an alias of a strict ancestor);
3. resolve the subcommands (every sub-node declares a non-empty name through
   its own Info, names are unique among siblings);
4. attach the options of every strict ancestor, root first;
5. compute the path by joining ancestor names with a single space;
6. recurse into every sub-node.

Errors are raised as SchemaError subclasses the moment they are found; no
table is returned unless the whole description is valid.
"""
import logging
import re
from types import EllipsisType

from .faults import *
from .schema import Info, Flag, Option, Schema
from .tree import OptionEntry, SubcommandEntry, Node, CommandTree
from .utils import *

logger = logging.getLogger(__name__)


def _label(fields):
    return ".".join(("<root>", *fields))


def _classify(schema, fields, /):
    """
    Split a node's fields into (info, options, subnodes), preserving order.
    """
    label = _label(fields)

    if not isinstance(info := schema.info, Info | Unset):
        raise UnsupportedFieldError(
            f"{label} info must be an Info, got {type(info).__name__!r}", path=label
        )

    options = []
    subnodes = []
    for field, value in schema.fields.items():
        match value:
            case Info():
                if info is not Unset:
                    raise DuplicateInfoError(f"{label} declares more than one info field", path=label, field=field)
                info = value
            case Flag() | Option():
                options.append((field, value))
            case Schema():
                subnodes.append((field, value))
            case _:
                raise UnsupportedFieldError(
                    f"{label}.{field} is a {type(value).__name__!r}, which is not supported "
                    f"(expected a flag, an option or a schema)",
                    path=label,
                    field=field
                )
    return info, options, subnodes


def _describe(descr, label, /):
    if not isinstance(descr, str | Unset):
        raise UnsupportedFieldError(f"{label} description must be a string", path=label)
    return coalesce(descr, "").strip()


def _resolve_option(field, option, fields, /):
    """
    Validate one option field and return (aliases, OptionEntry).
    """
    label = f"{_label(fields)}.{field}"

    if not option.names:
        raise EmptyAliasError(f"{label} must declare at least one alias", path=_label(fields), field=field)

    aliases = []
    for alias in option.names:
        if not isinstance(alias, str) or not alias.strip():
            raise EmptyAliasError(f"{label} declares an empty alias {alias!r}", path=_label(fields), field=field)
        elif re.search(r"\s", alias):
            raise EmptyAliasError(f"{label} alias {alias!r} cannot contain whitespace", path=_label(fields), field=field)
        elif alias in aliases:
            raise DuplicateAliasError(f"{label} declares the alias {alias!r} twice", path=_label(fields), field=field)
        aliases.append(alias)

    entry = OptionEntry(
        display_name=", ".join(aliases),
        descr=_describe(option.descr, label),
        field_name=field,
        requires_argument=option.requires_argument,
        default=option.default,
        helper=option.helper,
        index_path=tuple(fields),
        aliases=tuple(aliases),
    )
    return aliases, entry


def _resolve_params(params, label, /):
    match params:
        case UnsetType() | EllipsisType():
            return params
        case "...":
            return Ellipsis
        case bool():
            pass
        case int() if params >= 0:
            return params
    raise InvalidParameterCountError(
        f"{label} parameter count must be a non-negative integer or '...', got {params!r}", path=label
    )


def _subcommand(field, subnode, fields, path, /):
    """
    Resolve the SubcommandEntry of a sub-node, whose info must declare a
    single-word name.
    """
    label = f"{_label(fields)}.{field}"
    info = subnode.info
    if info is Unset:
        info = next((value for value in subnode.fields.values() if isinstance(value, Info)), Unset)
    if not isinstance(info, Info):
        raise MissingNameError(f"{label} is a subcommand and requires an info field with a name", path=label)
    if not isinstance(name := info.name, str) or not name.strip():
        raise MissingNameError(f"{label} is a subcommand and requires a non-empty name", path=label)
    if re.search(r"\s", name):
        raise MissingNameError(f"{label} name {name!r} must be a single word", path=label)
    return SubcommandEntry(
        name=name,
        descr=_describe(info.descr, label),
        field_name=field,
        full_path=f"{path} {name}" if path else name,
    )


def _extract(nodes, schema, fields, path, inherited, /):
    label = _label(fields)
    info, options, subnodes = _classify(schema, fields)

    if info is not Unset:
        if not isinstance(info.name, str | Unset):
            raise MissingNameError(f"{label} name must be a string", path=label)
        name = coalesce(info.name, "")
        descr = _describe(info.descr, label)
        parameter_count = _resolve_params(info.params, label)
    else:
        name, descr, parameter_count = "", "", Unset

    if not subnodes:
        if info is Unset:
            raise MissingInfoError(
                f"{label} is a terminal command and requires an info field with a parameter count", path=label
            )
        if parameter_count is Unset:
            raise MissingParameterCountError(
                f"{label} is a terminal command and must declare its parameter count", path=label
            )

    # Ancestors scan the whole window, so their aliases shadow any descendant's.
    shadowed = {alias: entry for entry in inherited for alias in entry.aliases}
    option_index = {}
    entries = []
    for field, option in options:
        aliases, entry = _resolve_option(field, option, fields)
        for alias in aliases:
            if alias in shadowed:
                raise DuplicateAliasError(
                    f"{label}.{field} alias {alias!r} is already bound by the parent option "
                    f"{_label(shadowed[alias].index_path)}.{shadowed[alias].field_name}",
                    path=label,
                    field=field
                )
            if alias in option_index:
                raise DuplicateAliasError(
                    f"{label} binds the alias {alias!r} to both {option_index[alias]!r} and {field!r}",
                    path=label,
                    field=field
                )
            option_index[alias] = field
        entries.append(entry)

    subcommands = []
    for field, subnode in subnodes:
        entry = _subcommand(field, subnode, fields, path)
        if any(subcommand.name == entry.name for subcommand in subcommands):
            raise DuplicateSubcommandError(f"{label} declares the subcommand {entry.name!r} twice", path=label, field=field)
        subcommands.append(entry)

    nodes[path] = Node(
        path=path,
        index_path=fields,
        option_index=option_index,
        parameter_count=parameter_count,
        name=name,
        descr=descr,
        subcommands=subcommands,
        options=entries,
        parent_options=inherited,
    )
    logger.debug(
        "extracted %r: %d option(s), %d subcommand(s), %d parent option(s)",
        path, len(entries), len(subcommands), len(inherited)
    )

    for (field, subnode), subcommand in zip(subnodes, subcommands):
        _extract(nodes, subnode, (*fields, field), subcommand.full_path, (*inherited, *entries))


def extract(schema, /):
    """
    Build the command-tree table from a schema description.

    Parameters
    - schema: Schema
      The root node of the description.

    Returns
    - CommandTree: read-only mapping from command path to Node.

    Raises
    - SchemaError (or a subclass): the description is invalid; no table is produced.
    """
    if not isinstance(schema, Schema):
        raise UnsupportedFieldError(f"extract() argument must be a schema, not {type(schema).__name__!r}")

    nodes = {}
    _extract(nodes, schema, (), "", ())
    logger.debug("extracted command tree with %d node(s)", len(nodes))
    return CommandTree(nodes)


__all__ = (
    "extract",
)
