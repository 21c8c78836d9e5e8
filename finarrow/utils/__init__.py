"""Pure numeric helpers."""
