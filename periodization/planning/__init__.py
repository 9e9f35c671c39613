"""Periodization phase evaluation."""
