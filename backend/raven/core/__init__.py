"""Configuration, constants, exceptions and id helpers."""
