"""Unit tests for the conversion tool implementations."""

import pytest

from file_url.metrics import get_metrics_collector
from file_url.tools.convert import (
    decode_component,
    encode_component,
    path_to_url,
    url_to_path,
)


class TestPathToUrl:
    """Tests for path_to_url tool."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Test a successful conversion."""
        result = await path_to_url("/some/file.txt", flavour="posix")
        assert result == {
            "status": "success",
            "url": "file:///some/file.txt",
            "flavour": "posix",
        }

    @pytest.mark.asyncio
    async def test_default_flavour_from_config(self, set_env_vars):
        """Test the configured flavour is used when none is given."""
        set_env_vars(FILE_URL_FLAVOUR="windows")
        result = await path_to_url("C:\\WINDOWS\\clock.avi")
        assert result["url"] == "file:///C:/WINDOWS/clock.avi"
        assert result["flavour"] == "windows"

    @pytest.mark.asyncio
    async def test_empty_path(self):
        """Test an empty path is a validation error."""
        result = await path_to_url("   ")
        assert result["status"] == "error"
        assert result["error_code"] == "validation_error"
        assert result["message"].startswith("path:")

    @pytest.mark.asyncio
    async def test_unknown_flavour(self):
        """Test an unknown flavour is a validation error."""
        result = await path_to_url("/a", flavour="vms")
        assert result["error_code"] == "validation_error"
        assert "flavour" in result["message"]

    @pytest.mark.asyncio
    async def test_not_representable(self):
        """Test invalid text on Windows maps to an error response."""
        result = await path_to_url("C:\\bad\udc80", flavour="windows")
        assert result["status"] == "error"
        assert result["error_code"] == "encoding_not_representable"
        assert result["segment_index"] == 0

    @pytest.mark.asyncio
    async def test_posix_unpaired_surrogate(self):
        """Test text with no byte form on POSIX maps to an error response."""
        result = await path_to_url("/a/\ud800", flavour="posix")
        assert result["status"] == "error"
        assert result["error_code"] == "encoding_not_representable"
        assert result["segment_index"] == 1

    @pytest.mark.asyncio
    async def test_replace_policy_from_config(self, set_env_vars):
        """Test FILE_URL_TEXT_ERRORS=replace is honored."""
        set_env_vars(FILE_URL_TEXT_ERRORS="replace")
        result = await path_to_url("C:\\bad\udc80", flavour="windows")
        assert result["url"] == "file:///C:/bad%EF%BF%BD"

    @pytest.mark.asyncio
    async def test_records_metrics(self):
        """Test calls and failures are counted."""
        await path_to_url("/a", flavour="posix")
        await path_to_url("", flavour="posix")

        metrics = get_metrics_collector().get_metrics("path_to_url")
        assert metrics.count == 2
        assert metrics.errors == 1


class TestUrlToPath:
    """Tests for url_to_path tool."""

    @pytest.mark.asyncio
    async def test_success(self):
        """Test a successful conversion."""
        result = await url_to_path("file:///foo/bar%20baz.txt", flavour="posix")
        assert result == {
            "status": "success",
            "path": "/foo/bar baz.txt",
            "flavour": "posix",
        }

    @pytest.mark.asyncio
    async def test_raw_bytes_rendered_with_escapes(self):
        """Test undecodable bytes are shown as backslash escapes."""
        result = await url_to_path("file:///caf%E9", flavour="posix")
        assert result["path"] == "/caf\\xe9"

    @pytest.mark.asyncio
    async def test_other_scheme_rejected(self):
        """Test non-file URLs are a validation error."""
        result = await url_to_path("http://example.com/a")
        assert result["error_code"] == "validation_error"
        assert "Expected file:// URL" in result["message"]

    @pytest.mark.asyncio
    async def test_encoded_separator(self):
        """Test a decoded separator maps to an error with its segment."""
        result = await url_to_path("file:///a%2Fb", flavour="posix")
        assert result["error_code"] == "decoding_not_representable"
        assert result["segment_index"] == 3

    @pytest.mark.asyncio
    async def test_unpaired_surrogate(self):
        """Test a URL segment with no byte form maps to an error response."""
        result = await url_to_path("file:///\ud800", flavour="posix")
        assert result["status"] == "error"
        assert result["error_code"] == "decoding_not_representable"
        assert result["segment_index"] == 3

    @pytest.mark.asyncio
    async def test_strict_escapes_from_config(self, set_env_vars):
        """Test FILE_URL_STRICT_ESCAPES=true rejects malformed escapes."""
        set_env_vars(FILE_URL_STRICT_ESCAPES="true")
        result = await url_to_path("file:///100%", flavour="posix")
        assert result["error_code"] == "malformed_escape"
        assert result["segment_index"] == 3

    @pytest.mark.asyncio
    async def test_lenient_escapes_by_default(self):
        """Test malformed escapes pass through by default."""
        result = await url_to_path("file:///100%", flavour="posix")
        assert result["path"] == "/100%"


class TestComponentTools:
    """Tests for encode_component and decode_component tools."""

    @pytest.mark.asyncio
    async def test_encode(self):
        """Test encoding a component."""
        result = await encode_component("some & what.whtvr")
        assert result == {"status": "success", "encoded": "some%20%26%20what.whtvr"}

    @pytest.mark.asyncio
    async def test_encode_empty_is_allowed(self):
        """Test the empty component encodes to empty."""
        assert (await encode_component(""))["encoded"] == ""

    @pytest.mark.asyncio
    async def test_decode(self):
        """Test decoding a component to text and hex."""
        result = await decode_component("bar%20baz")
        assert result == {"status": "success", "text": "bar baz", "hex": "6261722062617a"}

    @pytest.mark.asyncio
    async def test_decode_non_utf8(self):
        """Test text is null when bytes are not UTF-8."""
        result = await decode_component("%FF")
        assert result["text"] is None
        assert result["hex"] == "ff"

    @pytest.mark.asyncio
    async def test_decode_missing(self):
        """Test a missing value is a validation error."""
        result = await decode_component(None)  # type: ignore[arg-type]
        assert result["error_code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_encode_unpaired_surrogate(self):
        """Test text with no byte form maps to an error response."""
        result = await encode_component("\ud800")
        assert result["status"] == "error"
        assert result["error_code"] == "encoding_not_representable"

    @pytest.mark.asyncio
    async def test_decode_unpaired_surrogate(self):
        """Test an encoded value with no byte form maps to an error response."""
        result = await decode_component("\ud800")
        assert result["status"] == "error"
        assert result["error_code"] == "decoding_not_representable"
