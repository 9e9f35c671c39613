"""Shared infrastructure: logging, clock, numeric helpers."""
