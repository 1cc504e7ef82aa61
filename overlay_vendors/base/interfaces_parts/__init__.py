"""Protocol definitions (one class per module)."""
