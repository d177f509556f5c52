"""Quiz attempt scoring and study-material recommendations."""
