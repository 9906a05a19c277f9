"""
Package entry point.

Allows running the application via:

    python -m kentcourses

This simply forwards execution to kentcourses.cli.main().
"""

from kentcourses.cli import main

if __name__ == "__main__":
    main()
