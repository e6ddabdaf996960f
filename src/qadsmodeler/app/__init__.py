"""Qt-facing application state."""
