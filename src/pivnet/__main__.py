"""Entrypoint for ``python -m pivnet``."""

from .cli import main

if __name__ == "__main__":
    main()
