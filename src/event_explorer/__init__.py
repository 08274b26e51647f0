"""Event Explorer - a client for a directory of time-bounded events."""
