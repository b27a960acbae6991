"""Infrastructure: cache cell, external data sources and runtime services."""
