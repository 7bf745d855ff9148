"""Module entrypoint for ``python -m planjira``."""

from planjira.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
