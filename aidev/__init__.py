"""
aidev - AI development environment bootstrapper.

Prepares a project directory and shell session for AI-assisted development:
install prefix, environment files, scaffold files, and assistant CLIs.
"""

__version__ = "0.1.0"
