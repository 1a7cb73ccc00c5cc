"""Decoder backends and the DH parameter safety validator."""
