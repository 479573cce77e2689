"""Terminal UI components (Rich)."""
