"""Core blog building blocks: permalinks, posts, rendering and site generation."""
