"""
Main entry point for codewhiskers when run as a module.

Allows execution via: python -m codewhiskers

codewhiskers/src/codewhiskers/__main__.py
"""

from .cli import main

if __name__ == "__main__":
    main()
