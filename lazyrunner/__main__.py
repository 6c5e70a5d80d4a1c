"""Module entrypoint for ``python -m lazyrunner``."""

from .cli import main


if __name__ == "__main__":
    main()
