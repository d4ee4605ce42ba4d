"""Configuration, logging, errors, security and persistence primitives."""
