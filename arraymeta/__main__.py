"""
arraymeta module entry point.

Allows running as: python -m arraymeta <command> [options]
"""

from .cli import main

if __name__ == "__main__":
    main()
