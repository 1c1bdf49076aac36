"""
cmdtree utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the schema, tree and fault layers so that
  every model object behaves the same way in reprs, help and diagnostics.

Overview
- UnsetType / Unset
  • Singleton sentinel for “not provided”, distinct from None (an optional
    string option legitimately stores None).
- coalesce(value, default=None)
  • Replace Unset with a concrete default, preserving None/0/""/().
- rename(callable, name) / @rename("name")
  • Stable __name__/__qualname__ for generated accessors.
- view("attr")
  • Read-only property over a private backing field (self._attr), returning
    immutable views of containers.
- pluralize(word, count)
  • Tiny English pluralizer for fault messages ("1 argument", "2 arguments").
- ModelType
  • Metaclass wiring __introspectable__ names into read-only properties and
    giving every model a stable __repr__/__rich_repr__.
"""
import builtins
import functools
import operator
import re
from collections.abc import Sequence, Mapping, Set
from types import MappingProxyType
from typing import final


@final
class UnsetType:
    """
    Internal sentinel type representing a value that was not provided.

    Characteristics
    - Boolean-false: bool(Unset) is False, but it is distinct from None and 0.
    - Printable: repr(Unset) -> "Unset".
    - Non-subclassable and a process-wide singleton.
    """

    def __or__(self, other, /):
        """
        Support PEP 604 unions in isinstance checks (e.g., str | Unset).
        """
        try:
            return type(self) | other
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __copy__(self):
        return self

    def __deepcopy__(self, memo, /):
        return self

    def __reduce__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()
"""
Internal sentinel for “not provided”.

Notes
- Singleton: there is only one Unset instance.
- Distinct from None: an optional string option stores None when absent.
- Falsey: bool(Unset) is False.
"""


def coalesce(object, default=None, /):
    """
    Resolve the Unset sentinel to a concrete default.

    Falsey values like None, 0, "" or () are preserved as-is; only Unset is
    replaced.

    Examples
    - coalesce("name", "fallback") -> "name"
    - coalesce(Unset, "fallback")  -> "fallback"
    - coalesce(None, "fallback")   -> None
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Set a stable __name__/__qualname__ on a callable, or return a decorator
    that will do so later.

    - rename(callable, name) -> callable
    - rename(name) -> decorator
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def view(name, /):
    """
    Define a read-only property over the backing attribute "_{name}".

    Containers are exposed as immutable views:
    - Sequence (non-str) → tuple
    - Mapping            → MappingProxyType
    - Set                → frozenset
    - anything else      → returned as-is
    """
    if not isinstance(name, str):
        raise TypeError("view() argument must be a string")

    @rename(name)
    def getter(self):
        value = getattr(self, "_" + name)
        if isinstance(value, Sequence) and not isinstance(value, str):
            return tuple(value)
        if isinstance(value, Mapping) and not isinstance(value, MappingProxyType):
            return MappingProxyType(value)
        if isinstance(value, Set) and not isinstance(value, frozenset):
            return frozenset(value)
        return value

    return property(getter)


@functools.cache
def pluralize(word, count=2, /):
    """
    Best-effort English plural of a single lowercase noun, driven by a count.

    Examples
    - pluralize("argument", 1)   -> "argument"
    - pluralize("argument", 0)   -> "arguments"
    - pluralize("alias")         -> "aliases"
    - pluralize("dependency")    -> "dependencies"
    """
    if not isinstance(word, str):
        raise TypeError("pluralize() argument must be a string")
    if count == 1 or not word:
        return word

    lower = word.lower()
    if lower.endswith(("s", "sh", "ch", "x", "z")):
        plural = word + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = word[:-1] + "ies"
    else:
        plural = word + "s"
    return plural.upper() if word.isupper() else plural


class ModelType(type):
    """
    Metaclass for introspectable, read-only model classes.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      (see view()) backed by the private "_{name}" field.
    - Derive __typename__ from the class name (camel-case split with hyphens)
      for use in messages.
    - Provide stable __repr__/__rich_repr__ implementations; __displayable__
      (if set) narrows which fields are shown.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: view(name) for name in namespace.get("__introspectable__", ())
            },
            **options
        )

        if "__repr__" not in namespace:
            @rename("__repr__")
            def __repr__(self):
                return f"{type(self).__typename__}({
                    ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
                })"
            self.__repr__ = __repr__

        if "__rich_repr__" not in namespace:
            @rename("__rich_repr__")
            def __rich_repr__(self):
                for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                    yield name, getattr(self, name)
            self.__rich_repr__ = __rich_repr__

        return self


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "view",
    "pluralize",

    # Types
    "UnsetType",
    "ModelType",

    # Constants
    "Unset",
)
