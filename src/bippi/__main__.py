"""Entry point for ``python -m bippi``."""

from bippi.cli import main

if __name__ == "__main__":
    main()
