"""Base error class shared by every yamlrep module."""


class YAMLError(Exception):
    """Base exception for YAML errors."""
    pass
