"""Packaged default configuration (flip.v1.yaml)."""
