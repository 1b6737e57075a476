"""Bundled source files for canary transforms."""
