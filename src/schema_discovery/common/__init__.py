"""Shared helpers: configuration, error taxonomy, SQL quoting and stream utilities."""
