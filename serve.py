#!/usr/bin/env python3
"""
Simple HTTP server for the htmleffect preview page.
"""

import http.server
import os
import socketserver

PORT = int(os.environ.get("HTMLEFFECT_PORT", "8000"))


class CORSHTTPRequestHandler(http.server.SimpleHTTPRequestHandler):
    """HTTP handler with the cross-origin headers PyScript workers expect."""

    extensions_map = {
        **http.server.SimpleHTTPRequestHandler.extensions_map,
        ".toml": "application/toml",
        ".wasm": "application/wasm",
    }

    def end_headers(self):
        self.send_header('Cross-Origin-Opener-Policy', 'same-origin')
        self.send_header('Cross-Origin-Embedder-Policy', 'require-corp')
        self.send_header('Access-Control-Allow-Origin', '*')
        super().end_headers()

    def do_OPTIONS(self):
        self.send_response(200)
        self.end_headers()


if __name__ == '__main__':
    with socketserver.TCPServer(("", PORT), CORSHTTPRequestHandler) as httpd:
        print(f"Serving at http://localhost:{PORT}")
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped")
