"""Test suite for spine."""
from unittest import TestCase, main

__all__ = ["TestCase", "main"]
