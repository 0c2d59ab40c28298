"""
Registries for hobby terms: the canonical hobby dictionary and the
per-run unknown-hobby registry.
"""
