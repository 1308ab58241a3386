"""Shared test fixtures."""

from pathlib import Path

import pytest
from letsbuild.config import (
    Config,
    ContentConfig,
    LiveReloadConfig,
    ServerConfig,
    SiteConfig,
)
from letsbuild.theme import ThemeConfig

TEST_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <title>{{title}}</title>
</head>
<body>
    <h1>{{title}}</h1>
    <div>{{content}}</div>
</body>
</html>"""


@pytest.fixture
def content_dir(tmp_path: Path) -> Path:
    """Create the content directory for posts."""
    content = tmp_path / "content"
    content.mkdir(exist_ok=True)
    return content


@pytest.fixture
def template_path(tmp_path: Path) -> Path:
    """Write the test page template."""
    path = tmp_path / "template.html"
    path.write_text(TEST_TEMPLATE, encoding="utf-8")
    return path


@pytest.fixture
def test_config(tmp_path: Path, content_dir: Path, template_path: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        site=SiteConfig(intro="<p>Hello from the test blog.</p>"),
        content=ContentConfig(
            source_dir=content_dir,
            build_dir=tmp_path / "build",
            template=template_path,
            cache_dir=tmp_path / ".cache",
        ),
        server=ServerConfig(),
        live_reload=LiveReloadConfig(enabled=False),
        theme=ThemeConfig(),
    )
