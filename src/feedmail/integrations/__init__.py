"""Adapters that turn email sources into raw email records."""

from __future__ import annotations

from feedmail.integrations.eml import EmlLoadError, load_eml, parse_eml

__all__ = ["EmlLoadError", "load_eml", "parse_eml"]
