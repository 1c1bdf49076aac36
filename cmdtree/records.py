"""
cmdtree destination records.

A Record is the caller-owned, mutable bag of bound values: one attribute per
option field and one nested Record per sub-node field, mirroring the shape of
the schema description. The consumer mutates it in place, one assignment per
recognized option occurrence.

Any object supporting getattr/setattr for the schema's field names (a
dataclass, a SimpleNamespace, ...) may be used instead of a Record.
"""
from functools import reduce


class Record:
    """
    Attribute bag with value equality and a readable representation. It has no
    public methods, so every schema field name is available.

        >>> record = Record(port=None, serve=Record(verbose=False))
        >>> record.serve.verbose = True
        >>> record
        Record(port=None, serve=Record(verbose=True))
    """

    def __init__(self, /, **fields):
        self.__dict__.update(fields)

    def __eq__(self, other, /):
        if not isinstance(other, Record):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({", ".join("%s=%r" % item for item in vars(self).items())})"

    def __rich_repr__(self):
        yield from vars(self).items()


def asdict(record, /):
    """
    Return a plain, recursively converted dict of the values bound in record.
    """
    return {
        name: asdict(value) if isinstance(value, Record) else value
        for name, value in vars(record).items()
    }


def resolve(record, index_path, /):
    """
    Walk index_path (a sequence of field names) down from record and return
    the nested record it designates. The empty path designates record itself.
    """
    return reduce(getattr, index_path, record)


__all__ = (
    "Record",
    "resolve",
    "asdict",
)
