"""
Entry point for running dtcw CLI as a module.

Usage: python -m dtcw.cli [environment] [install component | tasks]
"""

from .parser import main

if __name__ == "__main__":
    main()
