"""
Package entry point.

Allows running the application via:

    python -m studentplanner

This simply forwards execution to studentplanner.cli.main().
"""

from studentplanner.cli import main

if __name__ == "__main__":
    main()
