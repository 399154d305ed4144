"""Relational catalog discovery and DDL generation for MySQL, PostgreSQL and SQLite."""

__version__ = "0.1.0"
