"""Utility modules for the life calendar."""
