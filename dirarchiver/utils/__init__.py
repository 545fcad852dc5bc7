"""Utility modules for dirarchiver."""
