"""Services Layer — async engine entry point and extension fold."""
