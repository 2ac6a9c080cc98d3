"""
Package entry point.

Allows running the application via:

    python -m syllabuscal

This simply forwards execution to syllabuscal.cli.main().
"""

from syllabuscal.cli import main

if __name__ == "__main__":
    main()
