from __future__ import annotations

import argparse
import sys

from .params.errors import EncodingFormat
from .params.parameters import DiffieHellmanParameters, default_parameters


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pydhparams")
    sub = p.add_subparsers(dest="cmd", required=True)
    chk = sub.add_parser("check")
    chk.add_argument("path")  # "-" reads stdin
    chk.add_argument("--format", choices=["pem", "der"], default="pem")
    dflt = sub.add_parser("default")
    dflt.add_argument("--pem", action="store_true")
    return p


def _load(path: str, fmt: EncodingFormat) -> DiffieHellmanParameters:
    if path == "-":
        return DiffieHellmanParameters.from_stream(sys.stdin.buffer, fmt)
    return DiffieHellmanParameters.from_file(path, fmt)


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    if args.cmd == "check":
        try:
            params = _load(args.path, EncodingFormat(args.format))
        except OSError as e:
            print(e, file=sys.stderr)
            return 2
        if not params.is_valid():
            print(params.error_string())
            return 1
        print(f"ok {params.key_size}")
        return 0
    if args.cmd == "default":
        params = default_parameters()
        if args.pem:
            sys.stdout.write(params.to_pem().decode("ascii"))
        else:
            print(repr(params))
        return 0
    return 2


if __name__ == "__main__":
    sys.exit(main())
