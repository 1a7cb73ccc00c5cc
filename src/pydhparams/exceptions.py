"""Exception hierarchy for PyDHParams.

Decoders signal failures by raising DHParametersDecodeError subclasses. The
public value type (DiffieHellmanParameters) catches them and records the
carried error kind, so callers inspect is_valid()/error() instead of handling
exceptions.
"""
from __future__ import annotations

from .params.errors import DHParametersError


class PyDHParamsError(Exception):
    """Base class for all PyDHParams errors."""


class DHParametersDecodeError(PyDHParamsError):
    """Raised by a decoder when input cannot be turned into usable parameters.

    Attributes:
        kind: The DHParametersError recorded on the resulting value.
    """

    kind: DHParametersError = DHParametersError.INVALID_INPUT_DATA

    def __init__(self, message: str | None = None):
        super().__init__(message or self.kind.message)


class InvalidInputDataError(DHParametersDecodeError):
    """Empty, truncated or malformed DER/PEM input, or a failed re-encode."""

    kind = DHParametersError.INVALID_INPUT_DATA


class BackendUnavailableError(InvalidInputDataError):
    """No cryptographic backend is available to decode the input.

    Reported to callers as INVALID_INPUT_DATA; there is no separate kind.
    """


class UnsafeParametersError(DHParametersDecodeError):
    """The input parsed but the (p, g) pair failed the safety classification."""

    kind = DHParametersError.UNSAFE_PARAMETERS
