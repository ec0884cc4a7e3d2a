"""Time sources for stamping and checking entry expiry."""
