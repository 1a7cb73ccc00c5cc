from __future__ import annotations

from enum import Enum


class EncodingFormat(Enum):
    """Serialization of DH parameters handed to the decoder."""

    PEM = "pem"
    DER = "der"


class DHParametersError(Enum):
    """Error classification carried by a DiffieHellmanParameters value."""

    NO_ERROR = 0
    INVALID_INPUT_DATA = 1
    UNSAFE_PARAMETERS = 2

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    DHParametersError.NO_ERROR: "no error",
    DHParametersError.INVALID_INPUT_DATA: "invalid input data",
    DHParametersError.UNSAFE_PARAMETERS: "the given Diffie-Hellman parameters are deemed unsafe",
}
