"""Entry point for the flappy tile game."""

import sys

from flappy_tiles.cli import main

if __name__ == "__main__":
    sys.exit(main())
