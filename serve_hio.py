#!/usr/bin/env python3
"""
Serve the htmleffect preview page via hio's HTTP server with COOP/COEP/CORS headers.
"""

import mimetypes
import os
import time

import falcon

from hio.base import tyming
from hio.core import http
from hio.core.http import serving

TOCK = 0.0625


class HeaderMiddleware:
    """Add COOP/COEP/CORS headers to every response."""

    def process_response(self, req, resp, resource, req_succeeded):
        resp.set_header("Cross-Origin-Opener-Policy", "same-origin")
        resp.set_header("Cross-Origin-Embedder-Policy", "require-corp")
        resp.set_header("Access-Control-Allow-Origin", "*")


def create_app(static_dir=None):
    """Falcon app serving the repo root (index.html, pyscript.toml, python/)."""
    mimetypes.add_type("application/wasm", ".wasm")
    mimetypes.add_type("application/toml", ".toml")

    app = falcon.App(middleware=[HeaderMiddleware()])

    static_dir = static_dir or os.path.dirname(os.path.abspath(__file__))
    sink = serving.StaticSink(staticDirPath=static_dir)
    sink.StaticSinkBasePath = "/"
    app.add_sink(sink, prefix=sink.DefaultStaticSinkBasePath)
    return app


def run(host="", port=None):
    """
    Run a hio-based static server for the preview page.
    """
    port = port or int(os.environ.get("HTMLEFFECT_PORT", "8000"))
    tymist = tyming.Tymist(tyme=0.0)

    server = http.Server(
        name="htmleffect",
        host=host,
        port=port,
        tymeout=0.5,
        app=create_app(),
        tymth=tymist.tymen(),
    )
    server.reopen()
    print(f"Serving at http://localhost:{port}")

    try:
        while True:
            server.service()
            time.sleep(TOCK)
            tymist.tick(tock=TOCK)
    except KeyboardInterrupt:
        pass
    finally:
        server.close()


if __name__ == "__main__":
    run()
