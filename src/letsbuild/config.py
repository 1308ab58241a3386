"""Configuration management for letsbuild.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from letsbuild.theme import ThemeConfig

CONFIG_FILENAME = "letsbuild.toml"


@dataclass
class SiteConfig:
    """Site metadata."""

    url: str = "https://letsbuild.cloud"
    title: str = "Let's Build"
    intro: str = ""


@dataclass
class ContentConfig:
    """Content and build output configuration."""

    source_dir: Path = field(default_factory=lambda: Path("content"))
    build_dir: Path = field(default_factory=lambda: Path("build"))
    template: Path = field(default_factory=lambda: Path("template.html"))
    cache_dir: Path = field(default_factory=lambda: Path(".cache"))


@dataclass
class ServerConfig:
    """Preview server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    site: SiteConfig
    content: ContentConfig
    server: ServerConfig
    live_reload: LiveReloadConfig
    theme: ThemeConfig
    config_path: Path | None = None

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for letsbuild.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents.

        Returns:
            Path to config file or None if not found
        """
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults."""
        return cls(
            site=SiteConfig(),
            content=ContentConfig(),
            server=ServerConfig(),
            live_reload=LiveReloadConfig(),
            theme=ThemeConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {path}: {e}") from e

        config_dir = path.parent

        return cls(
            site=cls._parse_site(data.get("site")),
            content=cls._parse_content(data.get("content"), config_dir),
            server=cls._parse_server(data.get("server")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            theme=ThemeConfig.from_dict(data.get("theme")),
            config_path=path,
        )

    @classmethod
    def _parse_site(cls, data: object) -> SiteConfig:
        if data is None:
            return SiteConfig()

        if not isinstance(data, dict):
            raise ValueError("site section must be a dictionary")

        defaults = SiteConfig()
        values: dict[str, str] = {}
        for key in ("url", "title", "intro"):
            value = data.get(key, getattr(defaults, key))
            if not isinstance(value, str):
                raise ValueError(f"site.{key} must be a string")
            values[key] = value

        return SiteConfig(**values)

    @classmethod
    def _parse_content(cls, data: object, config_dir: Path) -> ContentConfig:
        """Parse content configuration section.

        Args:
            data: Raw content section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ContentConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("content section must be a dictionary")

        defaults = {
            "source_dir": "content",
            "build_dir": "build",
            "template": "template.html",
            "cache_dir": ".cache",
        }
        paths: dict[str, Path] = {}
        for key, default in defaults.items():
            value = data.get(key, default)
            if not isinstance(value, str):
                raise ValueError(f"content.{key} must be a string")
            paths[key] = config_dir / value

        return ContentConfig(**paths)

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        """Parse server configuration section.

        Args:
            data: Raw server section data

        Returns:
            ServerConfig instance
        """
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int) or isinstance(port, bool):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(enabled=enabled, watch_patterns=watch_patterns)

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        source_dir: Path | None = None,
        build_dir: Path | None = None,
        template: Path | None = None,
        live_reload_enabled: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            source_dir: Override content.source_dir
            build_dir: Override content.build_dir
            template: Override content.template
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        content = replace(
            self.content,
            source_dir=source_dir if source_dir is not None else self.content.source_dir,
            build_dir=build_dir if build_dir is not None else self.content.build_dir,
            template=template if template is not None else self.content.template,
        )

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(self, server=server, content=content, live_reload=live_reload)
