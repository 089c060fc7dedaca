"""Ops package."""
