# justlog/__init__.py
# Crash-recoverable workout session tracker w/ a Typer command-line host

__version__ = "0.1.0"
