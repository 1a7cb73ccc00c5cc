"""PyDHParams: decoding and safety classification of Diffie-Hellman parameters."""
from .params.errors import DHParametersError, EncodingFormat
from .params.parameters import DiffieHellmanParameters, default_parameters
from .params.groups import named_group
from .crypto.backend import set_default_decoder_backend

__version__ = "0.1.0"

__all__ = [
    "DHParametersError",
    "DiffieHellmanParameters",
    "EncodingFormat",
    "default_parameters",
    "named_group",
    "set_default_decoder_backend",
]
