"""Module entrypoint for ``python -m lazychan``.

All argument parsing and runtime setup happen in ``lazychan.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
