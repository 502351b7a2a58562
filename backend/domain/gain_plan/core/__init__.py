"""Core building blocks of the gain plan domain."""
