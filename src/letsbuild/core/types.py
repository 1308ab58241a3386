"""Core type definitions."""

from typing import NewType

# URL path for routing (e.g., "2021/05/03/hello-world", "about")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)
