"""Allow ``python -m jsontree``."""

from .cli import main

if __name__ == "__main__":
    main()
