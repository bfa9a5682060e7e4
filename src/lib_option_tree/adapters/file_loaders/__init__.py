"""Structured file loaders (JSON, YAML, TOML)."""
