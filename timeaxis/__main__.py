"""Entry point for running timeaxis as a module.

Usage:
    python -m timeaxis [options] OPTION_FILE
"""

from timeaxis.cli import main

if __name__ == "__main__":
    main()
