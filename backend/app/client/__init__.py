"""Terminal client and transcript state for the AI teacher relay."""
