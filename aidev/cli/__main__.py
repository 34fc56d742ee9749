"""
Entry point for running aidev CLI as a module.

Usage: python -m aidev.cli [command] [options]
"""

from .parser import main

if __name__ == "__main__":
    main()
