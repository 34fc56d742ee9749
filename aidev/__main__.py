"""
Entry point for running aidev CLI as a module.

Usage: python -m aidev [command] [options]
"""

from aidev.cli.parser import main

if __name__ == "__main__":
    main()
