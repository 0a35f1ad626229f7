"""Test configuration and fixtures for templatize."""

import json
from pathlib import Path
from typing import Dict

import pytest

SOURCE_MANIFEST = {
    "name": "create-preact-storybook-template",
    "version": "1.4.2",
    "description": "Scaffold a Preact app with Storybook",
    "type": "module",
    "bin": {"create-preact-storybook-template": "./bin/create-preact-storybook-template.js"},
    "files": ["bin", "template"],
    "scripts": {"dev": "vite", "build": "vite build", "test": "vitest"},
    "keywords": ["preact", "storybook"],
    "author": "Jane Doe",
    "license": "MIT",
    "repository": {"type": "git", "url": "https://example.com/repo.git"},
    "homepage": "https://example.com",
    "bugs": {"url": "https://example.com/issues"},
    "dependencies": {"preact": "^10.19.0"},
}

GITIGNORE_CONTENT = "node_modules\ndist\ncoverage\n*.log\n"


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


@pytest.fixture
def sample_project(tmp_path):
    """Create a project resembling a Preact/Storybook app with everything the packager must drop."""
    root = tmp_path / "project"

    # Kept
    _write(root / "package.json", json.dumps(SOURCE_MANIFEST, indent=2))
    _write(root / ".gitignore", GITIGNORE_CONTENT)
    _write(root / "README.md", "# Scaffolding tool\n")
    _write(root / "vite.config.ts", "export default {}\n")
    _write(root / "src" / "app.tsx", "export function App() {}\n")
    _write(root / "src" / "components" / "Button.tsx", "export function Button() {}\n")
    _write(root / "src" / "test" / "App.test.tsx", "test('renders', () => {})\n")
    _write(root / "public" / "favicon.svg", "<svg/>\n")

    # Excluded
    _write(root / "node_modules" / "preact" / "index.js", "module.exports = {}\n")
    _write(root / "dist" / "index.js", "console.log('built')\n")
    _write(root / ".git" / "HEAD", "ref: refs/heads/main\n")
    _write(root / ".github" / "workflows" / "ci.yml", "on: push\n")
    _write(root / "bin" / "create-preact-storybook-template.js", "#!/usr/bin/env node\n")
    _write(root / "coverage" / "lcov.info", "TN:\n")
    _write(root / "storybook-static" / "index.html", "<html></html>\n")
    _write(root / "public" / "docs" / "index.html", "<html></html>\n")
    _write(root / "debug-test" / "notes.txt", "debug\n")
    _write(root / "test-results" / "report.xml", "<xml/>\n")
    _write(root / "src" / "test-utils.ts", "export {}\n")
    _write(root / ".npmignore", "src\n")
    _write(root / "package-lock.json", "{}\n")
    _write(root / "template" / "stale.txt", "left over from an old build\n")

    return root


@pytest.fixture
def snapshot():
    """Return a function mapping every file under a directory to its bytes, keyed by relative path."""

    def take(root: Path) -> Dict[str, bytes]:
        return {
            path.relative_to(root).as_posix(): path.read_bytes() for path in sorted(root.rglob("*")) if path.is_file()
        }

    return take
