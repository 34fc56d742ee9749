"""
Console output for user-facing status lines.
"""

import sys


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for limited consoles.

    Falls back to ASCII-safe markers if Unicode emojis can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    file = file or sys.stdout
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("⚠️", "WARNING:")
            .replace("✅", "[OK]")
            .replace("❌", "[ERROR]")
        )
        print(safe_message.encode("ascii", "replace").decode("ascii"), file=file)
