"""Host-facing interfaces and platform backends."""
