"""Allow `python -m ttydoc FILE`."""

from ttydoc.cli import main

if __name__ == "__main__":
    main()
