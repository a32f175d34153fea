"""
Entry point for running dtcw as a module.

Usage: python -m dtcw [environment] [install component | tasks]
"""

from dtcw.cli.parser import main

if __name__ == "__main__":
    main()
