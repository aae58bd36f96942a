# justlog/cli/__init__.py
# CLI package; `app` is the console-script entry point

from .app import app

__all__ = ["app"]
