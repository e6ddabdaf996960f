"""Controllers that run work off the control thread."""
