"""Quote services: normalization, quote assembly and display formatting."""
