"""HTTP API for live quote previews."""
