"""letsbuild - static blog builder with Jekyll compatible permalinks."""

from letsbuild.core.permalink import map_file_path_to_url

__all__ = ["map_file_path_to_url"]
