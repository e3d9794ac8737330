"""Terminal interaction helpers."""
