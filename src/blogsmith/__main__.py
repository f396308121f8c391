"""Allow ``python -m blogsmith``."""

from blogsmith.ui.cli import main


if __name__ == "__main__":
    main()
