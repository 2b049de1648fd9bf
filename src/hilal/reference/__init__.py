"""Reference astronomy: time scales, mean elements, truncated solar/lunar series."""
