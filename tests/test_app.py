"""Tests for the static file Flask app."""

import pytest

from devserve.app import create_app


@pytest.fixture
def client(app_root):
    return create_app(str(app_root)).test_client()


class TestStaticFiles:
    def test_index_html(self, client):
        resp = client.get("/index.html")
        assert resp.status_code == 200
        assert b"<h1>Hello</h1>" in resp.data

    def test_root_serves_index(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert b"<h1>Hello</h1>" in resp.data

    def test_nested_css(self, client):
        resp = client.get("/styles/main.css")
        assert resp.status_code == 200
        assert resp.data == b"body { color: red; }"
        assert resp.mimetype == "text/css"

    def test_deep_js(self, client):
        resp = client.get("/scripts/vendor/lib.js")
        assert resp.status_code == 200
        assert resp.data == b"var lib = 1;"

    def test_directory_serves_its_index(self, client):
        resp = client.get("/docs")
        assert resp.status_code == 200
        assert resp.data == b"<p>docs</p>"

    def test_missing_file_404(self, client):
        assert client.get("/nope.html").status_code == 404

    def test_directory_without_index_404(self, client):
        assert client.get("/styles").status_code == 404

    def test_traversal_404(self, client, app_root):
        (app_root.parent / "secret.txt").write_text("secret")
        assert client.get("/../secret.txt").status_code == 404
        assert client.get("/%2e%2e/secret.txt").status_code == 404

    def test_no_cache_headers(self, client):
        resp = client.get("/index.html")
        assert "no-store" in resp.headers["Cache-Control"]
        assert resp.headers["Pragma"] == "no-cache"


class TestCustomIndex:
    def test_custom_index_file(self, app_root):
        (app_root / "home.html").write_text("home")
        client = create_app(str(app_root), index="home.html").test_client()
        assert client.get("/").data == b"home"


class TestLiveScript:
    SCRIPT = '<script src="/livereload.js?port=3000"></script>'

    def test_injected_before_body_end(self, app_root):
        client = create_app(str(app_root), live_script=self.SCRIPT).test_client()
        resp = client.get("/index.html")
        assert resp.status_code == 200
        assert resp.data == ("<html><body><h1>Hello</h1>%s</body></html>" % self.SCRIPT).encode()
        assert resp.content_length == len(resp.data)

    def test_appended_without_body_tag(self, app_root):
        client = create_app(str(app_root), live_script=self.SCRIPT).test_client()
        assert client.get("/docs").data == ("<p>docs</p>%s" % self.SCRIPT).encode()

    def test_not_injected_into_css(self, app_root):
        client = create_app(str(app_root), live_script=self.SCRIPT).test_client()
        assert client.get("/styles/main.css").data == b"body { color: red; }"

    def test_off_by_default(self, client):
        assert b"livereload.js" not in client.get("/index.html").data
