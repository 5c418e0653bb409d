"""Core Python package for put flow conviction signals."""
