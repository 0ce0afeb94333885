"""Chat mini-games."""
