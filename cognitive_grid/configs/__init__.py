"""Typed configuration dataclasses and TOML loading."""
