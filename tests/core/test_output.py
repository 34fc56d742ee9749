"""
Tests for console output helpers.
"""

import io

from aidev.core.output import safe_print


class AsciiStream(io.StringIO):
    """Stream that rejects characters outside ASCII, like a limited console."""

    def write(self, s):
        s.encode("ascii")
        return super().write(s)


class TestSafePrint:
    def test_plain_output(self):
        out = io.StringIO()

        safe_print("✅ OPENAI_API_KEY is set", file=out)

        assert out.getvalue() == "✅ OPENAI_API_KEY is set\n"

    def test_ascii_fallback(self):
        """Test emoji markers are replaced when the console cannot encode them."""
        out = AsciiStream()

        safe_print("✅ ok", file=out)
        safe_print("❌ failed", file=out)

        assert out.getvalue() == "[OK] ok\n[ERROR] failed\n"
