"""Session history storage."""
