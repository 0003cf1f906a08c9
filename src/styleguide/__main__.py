# styleguide/__main__.py
# Entry point for ``python -m styleguide``.
from .cli import app

if __name__ == "__main__":
    app()
