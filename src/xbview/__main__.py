"""Allow running xbview as a module: python -m xbview."""

from xbview.cli import main

if __name__ == "__main__":
    main()
