"""Shared pytest fixtures for devserve tests."""

import socket

import pytest
from click.testing import CliRunner


@pytest.fixture
def cli_runner():
    return CliRunner()


@pytest.fixture
def app_root(tmp_path):
    """An app folder laid out like the one `devserve serve` expects."""
    root = tmp_path / "app"
    (root / "styles").mkdir(parents=True)
    (root / "scripts" / "vendor").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "index.html").write_text("<html><body><h1>Hello</h1></body></html>")
    (root / "styles" / "main.css").write_text("body { color: red; }")
    (root / "scripts" / "app.js").write_text("console.log('hi');")
    (root / "scripts" / "vendor" / "lib.js").write_text("var lib = 1;")
    (root / "docs" / "index.html").write_text("<p>docs</p>")
    (root / "notes.txt").write_text("not watched")
    return root


@pytest.fixture
def busy_port():
    """A localhost port held by a listening socket for the test's duration."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    try:
        yield sock.getsockname()[1]
    finally:
        sock.close()


@pytest.fixture
def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]
