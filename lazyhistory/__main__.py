"""Module entrypoint for ``python -m lazyhistory``.

Behaves exactly like the ``lazyhistory`` console script.
"""

from .cli import main


if __name__ == "__main__":
    main()
