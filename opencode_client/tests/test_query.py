"""
Tests for URL building, query encoding and request parameter objects.

Run with: python -m pytest opencode_client/tests/test_query.py -v
"""

from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import parse_qsl, urlsplit

from opencode_client.models import TextPartInput
from opencode_client.params import Params, body_field, query_field, to_jsonable
from opencode_client.query import build_url, encode_query, merge_query, path_segment
from opencode_client.resources import ModelRef, SessionPromptParams, ToastVariant, TuiShowToastParams


class TestEncodeQuery:
    """Tests for encode_query."""

    def test_scalars_lists_and_booleans(self):
        pairs = encode_query({"path": "src", "ids": ["a", "b"], "flag": True, "off": False})
        assert pairs == [("path", "src"), ("ids", "a,b"), ("flag", "true"), ("off", "false")]

    def test_none_is_omitted(self):
        assert encode_query({"directory": None, "x": 1}) == [("x", "1")]
        assert encode_query(None) == []

    def test_nested_mapping_uses_brackets(self):
        pairs = encode_query({"filter": {"kind": "file", "depth": {"max": 2}}})
        assert pairs == [("filter[kind]", "file"), ("filter[depth][max]", "2")]

    def test_enum_values(self):
        assert encode_query({"variant": ToastVariant.ERROR}) == [("variant", "error")]


class TestBuildUrl:
    """Tests for build_url and merge_query."""

    def test_call_query_overrides_base_query(self):
        """Test a call parameter replaces the base URL's parameter of the same name."""
        url = build_url("http://h:1/?directory=old", "session", {"directory": "/new"})
        query = parse_qsl(urlsplit(url).query)
        assert query == [("directory", "/new")]

    def test_base_query_kept_when_not_overridden(self):
        url = build_url("http://h:1/?directory=old", "file", {"path": "a.py"})
        assert parse_qsl(urlsplit(url).query) == [("directory", "old"), ("path", "a.py")]

    def test_no_trailing_question_mark(self):
        assert build_url("http://h:1/", "session") == "http://h:1/session"
        assert build_url("http://h:1/", "session", {"directory": None}) == "http://h:1/session"

    def test_base_path_prefix_kept(self):
        assert build_url("http://h:1/api/", "session/abc") == "http://h:1/api/session/abc"
        assert build_url("http://h:1/api/", "/session") == "http://h:1/api/session"

    def test_merge_query_empty(self):
        assert merge_query("", []) == ""

    def test_untouched_base_parameters_keep_their_encoding(self):
        """Test flags and escapes on the base URL survive byte for byte."""
        assert merge_query("flag&x=a%20b", []) == "flag&x=a%20b"
        url = build_url("http://h:1/?flag&x=a%20b&directory=old", "session", {"directory": "/new"})
        assert urlsplit(url).query == "flag&x=a%20b&directory=%2Fnew"

    def test_encoded_base_key_is_overridden(self):
        assert merge_query("dir%5Bx%5D=1&keep=2", [("dir[x]", "3")]) == "keep=2&dir%5Bx%5D=3"


class TestPathSegment:
    def test_slashes_and_dots_are_escaped(self):
        """Test an id can never climb out of its path segment."""
        assert path_segment("../config") == "..%2Fconfig"
        assert path_segment("a b?c#d") == "a%20b%3Fc%23d"
        assert path_segment("ses_123") == "ses_123"


@dataclass
class ExampleParams(Params):
    name: str = body_field("name")
    tags: Optional[List[str]] = body_field("tags", default=None)
    limit: Optional[int] = query_field("limit", default=None)
    directory: Optional[str] = query_field("directory", default=None)


class TestParams:
    """Tests for Params serialization."""

    def test_fields_split_between_query_and_body(self):
        params = ExampleParams(name="x", limit=5, directory="/repo")
        assert params.url_query() == {"limit": 5, "directory": "/repo"}
        assert params.json_body() == {"name": "x"}

    def test_unset_fields_are_not_sent(self):
        params = ExampleParams(name="x")
        assert params.url_query() == {}
        assert "tags" not in params.json_body()

    def test_nested_params_and_models(self):
        """Test models, nested params and enums become plain JSON."""
        params = SessionPromptParams(
            parts=[TextPartInput(text="hi")],
            model=ModelRef(provider_id="anthropic", model_id="claude"),
            no_reply=True,
        )
        assert params.json_body() == {
            "parts": [{"text": "hi", "type": "text"}],
            "model": {"providerID": "anthropic", "modelID": "claude"},
            "noReply": True,
        }

    def test_enum_in_body(self):
        body = TuiShowToastParams(message="done", variant=ToastVariant.SUCCESS).json_body()
        assert body == {"message": "done", "variant": "success"}

    def test_to_jsonable_drops_none_in_mappings(self):
        assert to_jsonable({"a": 1, "b": None, "c": [ToastVariant.INFO]}) == {"a": 1, "c": ["info"]}
