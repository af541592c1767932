"""Emergency medical logistics dashboard API."""
