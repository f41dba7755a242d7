"""Tests for entity tag helpers."""

import pytest

from checkmk_actions.etag import extract_etag, normalize_etag, quote_etag, tag_endpoint_for


class TestNormalizeEtag:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ('"abc"', "abc"),
            ('W/"abc"', "abc"),
            ('w/"abc"', "abc"),
            ('  "abc"  ', "abc"),
            ("abc", "abc"),
            ("", ""),
            (None, ""),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_etag(raw) == expected

    def test_extract_ignores_header_case(self):
        assert extract_etag({"ETag": '"1"'}) == "1"
        assert extract_etag({"etag": 'W/"2"'}) == "2"
        assert extract_etag({"Etag": '"3"'}) == "3"

    def test_extract_missing(self):
        assert extract_etag({"Content-Type": "application/json"}) == ""
        assert extract_etag(None) == ""

    def test_quote(self):
        assert quote_etag("abc") == '"abc"'


class TestTagEndpoint:

    def test_object_path_unchanged(self):
        assert tag_endpoint_for("/objects/host_config/web01") == "/objects/host_config/web01"

    def test_action_path_cut(self):
        assert tag_endpoint_for("/objects/host_config/web01/actions/move/invoke") == "/objects/host_config/web01"

    def test_domain_type_action(self):
        assert (
            tag_endpoint_for("/domain-types/activation_run/actions/activate-changes/invoke")
            == "/domain-types/activation_run"
        )
