"""ring_scout.parser: HTML extraction heuristics."""
