"""Capacity guard services."""
