"""Preview server for alxblg.

Serves a built blog from a local directory:
- Existing files and directory indexes are served as-is.
- Any other path falls back to the site's index.html, or a 404 when the site
  has no index page.

Key classes:
- PreviewServer: Runs the HTTP server until interrupted.
- _PreviewHandler: HTTP request handler with the index fallback.
"""

from __future__ import annotations

import functools
import io
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path


class _PreviewHandler(SimpleHTTPRequestHandler):
    """HTTP request handler that falls back to index.html for unknown paths."""

    def end_headers(self):
        self.send_header("Cache-Control", "no-cache, no-store, must-revalidate")
        super().end_headers()

    def list_directory(self, path):
        # Never expose directory listings.
        return self._serve_fallback()

    def send_head(self):
        path = Path(self.translate_path(self.path))
        if path.is_file() or (path.is_dir() and (path / "index.html").is_file()):
            return super().send_head()
        return self._serve_fallback()

    def _serve_fallback(self):
        """Serve the root index.html with a 200, or a plain 404 when it is absent."""
        index_path = Path(self.directory) / "index.html"
        if not index_path.is_file():
            self.send_error(404, "Not Found")
            return None
        encoded = index_path.read_bytes()
        self.send_response(200)
        self.send_header("Content-type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(encoded)))
        self.end_headers()
        return io.BytesIO(encoded)


class PreviewServer:
    """Static file server for previewing a built blog.

    Attributes:
        directory: Directory being served.
        port: Port for the HTTP server.
    """

    def __init__(self, directory: Path, port: int = 3000):
        """Initialize the preview server.

        Args:
            directory: Directory holding the built site.
            port: Port to listen on.
        """
        self.directory = directory
        self.port = port
        self._httpd: ThreadingHTTPServer | None = None

    def create_server(self) -> ThreadingHTTPServer:
        handler = functools.partial(_PreviewHandler, directory=str(self.directory))
        return ThreadingHTTPServer(("", self.port), handler)

    def start(self) -> None:  # pragma: no cover - integration path
        self._httpd = self.create_server()
        print(f"Development server running at http://localhost:{self.port}")
        print(f"Serving: {self.directory}")
        print("Press Ctrl+C to stop the server")
        try:
            self._httpd.serve_forever()
        except KeyboardInterrupt:
            print("\nShutting down development server...")
        finally:
            self.stop()

    def stop(self) -> None:
        if self._httpd is not None:
            self._httpd.server_close()
            self._httpd = None
