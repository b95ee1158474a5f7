"""Shared utilities: configuration and background dispatch."""
