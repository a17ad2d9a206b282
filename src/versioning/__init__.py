"""Identifier model, parsing, version matching and the resolution engine."""
