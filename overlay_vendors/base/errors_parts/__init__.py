"""Error taxonomy implementation modules (one class per file)."""
