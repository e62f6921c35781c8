"""Episode merging, fallback data and resolution."""
