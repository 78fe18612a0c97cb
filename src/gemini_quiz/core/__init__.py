"""Core types shared across the quiz pipeline."""
