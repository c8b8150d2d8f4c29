"""Reduce C++ test cases for binding-generator bugs with creduce: a command line and its steps."""

__version__ = "0.1.0"
__all__ = ["cli", "steps"]