"""Concrete ParametersDecoder using the 'asn1crypto' and 'sympy' packages.

The PKCS#3 DHParameter structure and its PEM armor are handled by
asn1crypto, which only parses and never judges the numbers. The safety
verdict comes from validation.is_safe_dh (primality via sympy), so unsafe
groups are reported as such instead of as unparsable input.

The two paths differ in what they return for accepted input: decode_der
hands back the caller's bytes untouched, while decode_pem re-serializes
(p, g) because the PEM body is only an intermediate DER payload.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from asn1crypto import pem
from asn1crypto.algos import DHParameters
from cryptography.exceptions import UnsupportedAlgorithm

from .decoder import ParametersDecoder
from .validation import is_safe_dh
from ..exceptions import (
    BackendUnavailableError,
    InvalidInputDataError,
    UnsafeParametersError,
)

logger = logging.getLogger(__name__)

DH_PARAMETERS_PEM_LABEL = "DH PARAMETERS"

_PARSE_ERRORS = (ValueError, TypeError, KeyError)


@dataclass(frozen=True)
class ParsedDH:
    """Modulus and generator of a parsed DHParameter structure."""

    p: int
    g: int

    def to_der(self) -> bytes:
        """Encode (p, g) as a PKCS#3 DHParameter SEQUENCE."""
        return DHParameters({"p": self.p, "g": self.g}).dump(force=True)


def supports_ssl() -> bool:
    """Return True if cryptography's OpenSSL binding can be used."""
    try:
        from cryptography.hazmat.backends import default_backend

        default_backend().openssl_version_text()
    except (ImportError, UnsupportedAlgorithm, AttributeError) as e:
        logger.debug("cryptography backend unavailable: %s", e)
        return False
    return True


def parse_der(data: bytes) -> ParsedDH:
    """Parse DER DHParameter bytes; a trailing privateValueLength is ignored.

    Raises:
        InvalidInputDataError: If the input is empty, not a DHParameter
            SEQUENCE, followed by trailing bytes, or holds negative numbers.
    """
    if not data:
        raise InvalidInputDataError("empty DER input")
    try:
        # .native forces the lazily parsed children to decode now
        native = DHParameters.load(data, strict=True).native
    except _PARSE_ERRORS as e:
        raise InvalidInputDataError(f"malformed DER DH parameters: {e}") from e
    p, g = native.get("p"), native.get("g")
    if not isinstance(p, int) or not isinstance(g, int):
        raise InvalidInputDataError("DH parameters lack p or g")
    if p < 0 or g < 0:
        raise InvalidInputDataError("negative DH parameter")
    return ParsedDH(p=p, g=g)


def find_pem_block(data: bytes, label: str = DH_PARAMETERS_PEM_LABEL) -> bytes:
    """Return the DER body of the first PEM block carrying label.

    Blocks with other labels (certificates, keys) are skipped.

    Raises:
        InvalidInputDataError: If the armor is broken or no block matches.
    """
    if not data:
        raise InvalidInputDataError("empty PEM input")
    try:
        for object_type, _, der in pem.unarmor(data, multiple=True):
            if object_type == label:
                return der
    except _PARSE_ERRORS as e:
        raise InvalidInputDataError(f"malformed PEM input: {e}") from e
    raise InvalidInputDataError(f"no {label} block in PEM input")


def parse_pem(data: bytes) -> ParsedDH:
    """Locate a DH PARAMETERS block in PEM text and parse its DER body.

    Raises:
        InvalidInputDataError: If the input is empty, carries no DH
            PARAMETERS block, or the block body does not decode.
    """
    return parse_der(find_pem_block(data))


def _require_safe(parsed: ParsedDH) -> None:
    if not is_safe_dh(parsed.p, parsed.g):
        raise UnsafeParametersError()


class DefaultDecoder(ParametersDecoder):
    """ParametersDecoder backed by asn1crypto parsing and the sympy-based validator."""

    backend_id = "cryptography"

    def decode_der(self, data: bytes) -> bytes:
        """Validate DER input and return the original bytes.

        Raises:
            InvalidInputDataError: Empty or malformed input.
            UnsafeParametersError: (p, g) failed the safety classification.
        """
        parsed = parse_der(data)
        _require_safe(parsed)
        logger.debug("accepted DER DH parameters (%d-bit modulus)", parsed.p.bit_length())
        return bytes(data)

    def decode_pem(self, data: bytes) -> bytes:
        """Validate PEM input and return a canonical DER re-encoding.

        Raises:
            InvalidInputDataError: Empty or malformed input, unavailable
                backend, or failure to re-encode.
            UnsafeParametersError: (p, g) failed the safety classification.
        """
        if not data:
            raise InvalidInputDataError("empty PEM input")
        if not supports_ssl():
            raise BackendUnavailableError("cryptography backend unavailable")
        parsed = parse_pem(data)
        _require_safe(parsed)
        try:
            der = parsed.to_der()
        except _PARSE_ERRORS as e:
            raise InvalidInputDataError(f"could not re-encode DH parameters: {e}") from e
        if not der:
            raise InvalidInputDataError("re-encoded DH parameters are empty")
        logger.debug("accepted PEM DH parameters (%d-bit modulus)", parsed.p.bit_length())
        return der
