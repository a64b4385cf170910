"""Module entrypoint for ``python -m lazytree``.

Argument parsing and runtime setup happen in ``lazytree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
