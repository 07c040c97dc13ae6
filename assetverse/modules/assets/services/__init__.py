"""Inventory services."""
