"""Internal helpers shared across perch modules. Not public API."""
