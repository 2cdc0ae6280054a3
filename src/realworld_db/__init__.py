"""Relational data model for the RealWorld blogging application."""

__version__ = "0.1.0"
