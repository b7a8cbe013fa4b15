"""Module entrypoint for ``python -m lazymounts``."""

from .cli import main


if __name__ == "__main__":
    main()
