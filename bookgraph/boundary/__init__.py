"""Boundary adapters: record stores and the external inventory service."""
