"""Salon scheduling backend: natural-language booking command parsing."""
