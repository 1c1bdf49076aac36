import logging

from rich.pretty import pprint

from cmdtree import *

__prog__ = "thing"

cli = Schema(
    Info("thing", descr="hello"),
    validate=Schema(Info("validate", params=1, descr="validate a file")),
    enact=Schema(Info("enact", params=1, descr="validate a file read from stdin")),
    serve=Schema(
        Info("serve", params=0, descr="run the server"),
        port=Option("-p", "--port", descr="port to bind"),
    ),
    help=Flag("-h", "--help", descr="Display this help message", helper=True),
    log_level=Option("-l", "--log-level", descr="Set the log level", default="error"),
)

tree = extract(cli)


def level(name, /):
    """
    Map a --log-level value to a logging level, falling back to ERROR.
    """
    return logging.getLevelNamesMapping().get(name.upper(), logging.ERROR)


if __name__ == '__main__':
    record, dispatch = invoke(tree, shell=True, colorful=True)
    if not dispatch.helped:
        logging.basicConfig(level=level(record.log_level))
        match dispatch.node.path:
            case "serve":
                print("Port is %s" % record.serve.port)
            case "validate" | "enact":
                print("%s %s" % (dispatch.node.name, *dispatch.arguments))
        pprint(record)
