"""Tests for request and header models."""

from formwire.models.core import Headers, MimeType, OutgoingRequest


class TestHeaders:
    """Tests for the case-insensitive header mapping."""

    def test_case_insensitive_lookup(self) -> None:
        headers = Headers({"content-type": "application/json"})
        assert headers["Content-Type"] == "application/json"
        assert "CONTENT-TYPE" in headers

    def test_keeps_first_spelling(self) -> None:
        headers = Headers({"content-type": "a/b"})
        headers["Content-Type"] = "c/d"
        assert list(headers.items()) == [("content-type", "c/d")]

    def test_delete(self) -> None:
        headers = Headers({"X-Token": "1"})
        del headers["x-token"]
        assert len(headers) == 0

    def test_mime_type_strips_parameters(self) -> None:
        headers = Headers({"Content-Type": "Application/JSON; charset=utf-8"})
        assert headers.mime_type == MimeType.JSON

    def test_mime_type_absent(self) -> None:
        assert Headers().mime_type is None


class TestOutgoingRequest:
    """Tests for OutgoingRequest.params."""

    def test_mapping_body_is_params(self) -> None:
        assert OutgoingRequest(body={"a": 1}).params == {"a": 1}

    def test_encoded_body_is_not_params(self) -> None:
        assert OutgoingRequest(body="a=1").params is None
        assert OutgoingRequest().params is None

    def test_plain_dict_headers_are_wrapped(self) -> None:
        request = OutgoingRequest(headers={"Accept": "*/*"})
        assert isinstance(request.headers, Headers)
        assert request.headers["accept"] == "*/*"
