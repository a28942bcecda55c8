"""Qt host for the keyboard (requires the ``gui`` extra)."""
