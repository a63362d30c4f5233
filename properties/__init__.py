"""Rental listings referenced by conversations."""
