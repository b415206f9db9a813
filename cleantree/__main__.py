"""Module entrypoint for ``python -m cleantree``.

All argument parsing and rendering happen in ``cleantree.cli``.
"""

from .cli import main


if __name__ == "__main__":
    main()
