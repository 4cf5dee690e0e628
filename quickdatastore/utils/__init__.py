"""Configuration dataclasses for quickdatastore."""
