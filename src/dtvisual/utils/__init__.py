"""Utility modules for dtvisual."""
