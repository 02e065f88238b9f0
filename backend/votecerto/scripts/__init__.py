"""Operational scripts exposed as console entry points."""
