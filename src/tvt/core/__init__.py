"""Shared pure helpers: codec tables, display formatting, subprocess wrapper."""
