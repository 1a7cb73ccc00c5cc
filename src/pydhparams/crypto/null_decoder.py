"""Decoder used when no cryptographic backend is configured."""
from __future__ import annotations

import logging

from .decoder import ParametersDecoder
from ..exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


class UnavailableDecoder(ParametersDecoder):
    """Rejects every input as INVALID_INPUT_DATA after logging a warning."""

    backend_id = "none"

    def decode_der(self, data: bytes) -> bytes:
        logger.warning("DiffieHellmanParameters: decode_der not implemented for the current backend")
        raise BackendUnavailableError("no cryptographic backend available")

    def decode_pem(self, data: bytes) -> bytes:
        logger.warning("DiffieHellmanParameters: decode_pem not implemented for the current backend")
        raise BackendUnavailableError("no cryptographic backend available")
