"""Allow running junitview as a module: python -m junitview."""

from junitview.cli import main

if __name__ == "__main__":
    main()
