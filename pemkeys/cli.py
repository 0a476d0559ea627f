import argparse
import getpass
import sys
import uuid

from . import __version__
from .errors import KeyLoadError
from .log import get_logger
from .parser import ENCRYPTED_PKCS8, parse


def describe(record):
    lines = [
        " ALGO  = {}".format(record.algorithm),
        " OID   = {}".format(record.oid),
        " SIZE  = {} bits".format(record.key_size),
    ]
    if record.curve is not None:
        lines.append(" CURVE = {}".format(record.curve))
    lines.append(" FMT   = {}".format(record.format))
    return lines


def error_chain(e):
    chain = []
    while e is not None:
        chain.append(str(e))
        e = e.__cause__
    return chain


def main(argv=None):
    parser = argparse.ArgumentParser(prog="pemkeys", description="PEM private key decoder")
    parser.add_argument("file", help="PEM file holding the private key")
    parser.add_argument("--export", action="store_true",
                        help="write the key as unencrypted PKCS#8 to exported_<uuid>.pem")
    parser.add_argument("--version", action="version", version="%(prog)s " + __version__)
    args = parser.parse_args(argv)

    log = get_logger()
    with open(args.file, encoding="utf-8") as f:
        text = f.read()

    password = None
    if "-----BEGIN {}-----".format(ENCRYPTED_PKCS8) in text:
        password = getpass.getpass("Password: ")

    try:
        record = parse(text, password, source=args.file)
    except KeyLoadError as e:
        log.debug("parse of %s failed", args.file, exc_info=True)
        for i, msg in enumerate(error_chain(e)):
            print("{}{}".format("  caused by: " if i else "", msg), file=sys.stderr)
        return 1

    for line in describe(record):
        print(line)
    if args.export:
        name = "exported_{}.pem".format(uuid.uuid4())
        with open(name, "w") as f:
            f.write(record.to_pem())
        print("Saved to " + name)
    return 0


if __name__ == "__main__":
    sys.exit(main())
