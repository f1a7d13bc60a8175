"""Application layer for the LINE bot context."""
