# justlog/__main__.py
# Allow `python -m justlog`

from .cli import app

if __name__ == "__main__":
    app()
