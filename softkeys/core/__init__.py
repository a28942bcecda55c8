"""Keyboard core: layout model, key widgets, controller, focus tracking."""
