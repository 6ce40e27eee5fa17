"""Application settings and numeric helpers."""
