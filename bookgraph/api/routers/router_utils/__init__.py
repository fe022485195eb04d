"""Shared router helpers: error handling and response mapping."""
