"""Configuration, logging, error taxonomy and persistence primitives."""
