"""Run the srclight command line with ``python -m srclight``."""

from srclight.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
