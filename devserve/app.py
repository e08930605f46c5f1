"""
app.py - Flask app that serves a static application folder as-is.
Directories resolve to their index file; nothing outside the folder is reachable.
HTML pages get the live reload client script appended to their body.
"""

import os

from flask import Flask, abort, send_from_directory
from werkzeug.security import safe_join

from devserve.config import DEFAULT_INDEX


def _inject(html, script):
    pos = html.lower().rfind('</body>')
    if pos == -1:
        return html + script
    return html[:pos] + script + html[pos:]


def create_app(base_directory, index=DEFAULT_INDEX, live_script=None):
    root = os.path.abspath(base_directory)

    app = Flask(__name__, static_folder=None)

    @app.route("/")
    def index_page():
        return send_from_directory(root, index)

    @app.route("/<path:path>")
    def static_files(path):
        full = safe_join(root, path)
        if full is None:
            abort(404)
        if os.path.isdir(full):
            path = path.rstrip('/') + '/' + index
        return send_from_directory(root, path)

    @app.after_request
    def dev_headers(response):
        if live_script and response.status_code == 200 and response.mimetype == 'text/html':
            response.direct_passthrough = False
            response.set_data(_inject(response.get_data(as_text=True), live_script))
        # every reload must refetch
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate, max-age=0'
        response.headers['Pragma'] = 'no-cache'
        response.headers['Expires'] = '0'
        return response

    return app
