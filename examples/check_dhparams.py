"""Load DH parameters for a TLS server, falling back to the default group."""
import logging
import sys

from pydhparams import DiffieHellmanParameters, EncodingFormat, default_parameters


def load_server_dhparams(path: str | None) -> DiffieHellmanParameters:
    if path is None:
        return default_parameters()
    fmt = EncodingFormat.DER if path.endswith(".der") else EncodingFormat.PEM
    params = DiffieHellmanParameters.from_file(path, fmt)
    if not params.is_valid():
        print(f"{path}: {params.error_string()}; using default parameters", file=sys.stderr)
        return default_parameters()
    return params


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    params = load_server_dhparams(sys.argv[1] if len(sys.argv) > 1 else None)
    print(f"{params.key_size}-bit group: {params!r}")
