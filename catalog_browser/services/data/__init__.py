"""In-memory catalog: generated dataset and the local filter engine."""
