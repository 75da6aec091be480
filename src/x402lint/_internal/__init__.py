"""Internal helpers not covered by the public API."""
