"""
Unit tests for user-agent extractors.

Tests the Apache/Nginx quoted-field policy and the IIS W3C
field split and decoding.
"""

import pytest

from bot_traffic_pipeline.ingestion import (
    ApacheUserAgentExtractor,
    LogFormat,
    W3CUserAgentExtractor,
    decode_w3c_value,
)

# =============================================================================
# Apache / Nginx
# =============================================================================


class TestApacheUserAgentExtractor:
    """Tests for ApacheUserAgentExtractor."""

    @pytest.fixture
    def extractor(self):
        return ApacheUserAgentExtractor()

    def test_log_format(self, extractor):
        assert extractor.log_format == LogFormat.APACHE

    def test_combined_log_line(self, extractor):
        """Three quoted fields: the third is the user-agent."""
        line = (
            '127.0.0.1 - - [10/Oct/2024:00:00:00] "GET / HTTP/1.1" 200 512 "-" '
            '"Mozilla/5.0 GoogleBot/2.1"'
        )
        assert extractor.extract(line) == "Mozilla/5.0 GoogleBot/2.1"

    def test_vendor_appended_field_returns_last(self, extractor):
        """Four or more quoted fields: the last one wins."""
        line = (
            '10.0.0.1 - - [10/Oct/2024:00:00:00 +0000] "GET / HTTP/1.1" 200 512 '
            '"https://example.com/" "Mozilla/5.0" "bingbot/2.0"'
        )
        assert extractor.extract(line) == "bingbot/2.0"

    def test_dash_user_agent(self, extractor):
        """A '-' user-agent is returned as is."""
        line = '10.0.0.2 - - [x] "GET / HTTP/1.1" 200 2 "-" "-"'
        assert extractor.extract(line) == "-"

    def test_empty_quoted_user_agent(self, extractor):
        line = '10.0.0.2 - - [x] "GET / HTTP/1.1" 200 2 "-" ""'
        assert extractor.extract(line) == ""

    def test_fallback_finds_browser_token(self, extractor):
        """Irregular layout: first quoted field with a known token."""
        line = '10.0.0.3 - - [x] "GET / HTTP/1.1" 200 "Mozilla/5.0 (X11; Linux)"'
        assert extractor.extract(line) == "Mozilla/5.0 (X11; Linux)"

    def test_fallback_bot_token(self, extractor):
        line = '10.0.0.3 - - [x] "AhrefsBot/7.0"'
        assert extractor.extract(line) == "AhrefsBot/7.0"

    def test_fallback_can_return_request_line(self, extractor):
        """A request line containing a token is returned; the classifier guards it."""
        line = '10.0.0.3 - - [x] "GET /robots.txt HTTP/1.1" 200 "plain"'
        assert extractor.extract(line) == "GET /robots.txt HTTP/1.1"

    def test_fallback_tokens_are_case_sensitive(self, extractor):
        line = '10.0.0.3 - - [x] "MOZILLA" "CRAWLER"'
        assert extractor.extract(line) is None

    def test_no_quoted_fields(self, extractor):
        assert extractor.extract("10.0.0.1 - - [x] GET / 200 512") is None

    def test_custom_fallback_tokens(self):
        extractor = ApacheUserAgentExtractor(fallback_tokens=("Wget",))
        line = '10.0.0.3 - - [x] "GET / HTTP/1.1" "Wget/1.21"'
        assert extractor.extract(line) == "Wget/1.21"


# =============================================================================
# IIS W3C
# =============================================================================


def iis_line(user_agent: str) -> str:
    return (
        f"2024-01-15 12:30:45 10.0.0.1 GET /index.html - 443 - 192.0.2.100 "
        f"{user_agent} https://example.com/ 200 0 0 15"
    )


class TestW3CUserAgentExtractor:
    """Tests for W3CUserAgentExtractor."""

    @pytest.fixture
    def extractor(self):
        return W3CUserAgentExtractor()

    def test_log_format(self, extractor):
        assert extractor.log_format == LogFormat.IIS

    def test_percent_encoded_user_agent(self, extractor):
        """The 10th field is '+'- and percent-decoded."""
        line = iis_line("Mozilla%2F5.0+%28compatible%3B+bingbot%2F2.0%29")
        assert extractor.extract(line) == "Mozilla/5.0 (compatible; bingbot/2.0)"

    def test_plus_encoded_user_agent(self, extractor):
        line = iis_line("Mozilla/5.0+(compatible;+Googlebot/2.1)")
        assert extractor.extract(line) == "Mozilla/5.0 (compatible; Googlebot/2.1)"

    def test_encoded_plus_sign_survives(self, extractor):
        """'%2B' decodes to a literal '+' after the '+' replacement."""
        line = iis_line("Bot%2Bv1")
        assert extractor.extract(line) == "Bot+v1"

    def test_dash_user_agent(self, extractor):
        assert extractor.extract(iis_line("-")) == "-"

    def test_comment_line(self, extractor):
        assert extractor.extract("#Fields: date time s-ip cs-method") is None

    def test_too_few_fields(self, extractor):
        assert extractor.extract("2024-01-15 12:30:45 10.0.0.1 GET / - 443 - 1.2.3.4") is None

    def test_exactly_ten_fields(self, extractor):
        line = "2024-01-15 12:30:45 10.0.0.1 GET / - 443 - 1.2.3.4 curl/8.0"
        assert extractor.extract(line) == "curl/8.0"

    def test_split_is_bounded(self, extractor):
        """Trailing fields beyond the bound keep their embedded spaces."""
        line = iis_line("UA") + " extra tokens here"
        fields = line.split(maxsplit=14)
        assert len(fields) == 15
        assert extractor.extract(line) == "UA"

    def test_tab_separated_row(self, extractor):
        line = "\t".join(
            [
                "2024-01-15", "12:30:45", "10.0.0.1", "GET", "/", "-", "443", "-",
                "192.0.2.100", "Mozilla/5.0+(compatible;+YandexBot/3.0)", "-",
                "200", "0", "0", "15",
            ]
        )
        assert extractor.extract(line) == "Mozilla/5.0 (compatible; YandexBot/3.0)"

    def test_url_decode_disabled(self):
        extractor = W3CUserAgentExtractor(url_decode=False)
        assert extractor.extract(iis_line("A+B%2F1")) == "A+B%2F1"

    def test_custom_user_agent_index(self):
        extractor = W3CUserAgentExtractor(user_agent_index=3)
        assert extractor.extract(iis_line("UA")) == "GET"


class TestDecodeW3CValue:
    """Tests for decode_w3c_value."""

    def test_invalid_utf8_is_replaced(self):
        assert decode_w3c_value("a%FFb") == "a\ufffdb"

    def test_incomplete_escape_kept(self):
        assert decode_w3c_value("100%") == "100%"
