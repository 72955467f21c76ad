"""Tests for cache key generation."""

from pathlib import Path

import pytest

from paintgen.cache.keys import fingerprint_key, hash_image
from paintgen.types import ArtifactKind, ExhibitionOption


class TestHashImage:
    def test_deterministic(self):
        data = b"fake image data"
        assert hash_image(data) == hash_image(data)

    def test_different_data_different_hash(self):
        assert hash_image(b"aaa") != hash_image(b"bbb")

    def test_returns_hex_string(self):
        h = hash_image(b"test")
        assert len(h) == 64  # SHA256 hex digest
        assert all(c in "0123456789abcdef" for c in h)


class TestFingerprintKey:
    def test_deterministic(self):
        params = {"image": "abc123", "model": "openai/gpt-4o"}
        assert fingerprint_key("description", params) == fingerprint_key("description", params)

    def test_prefix_is_readable(self):
        assert fingerprint_key("poster", {"title": "x"}).startswith("poster:")

    def test_dict_order_independent(self):
        a = {"title": "Quiet Light", "descriptions": ["one", "two"]}
        b = {"descriptions": ["one", "two"], "title": "Quiet Light"}
        assert fingerprint_key("poster", a) == fingerprint_key("poster", b)

    def test_nested_dict_order_independent(self):
        a = {"outer": {"x": 1, "y": {"p": True, "q": None}}}
        b = {"outer": {"y": {"q": None, "p": True}, "x": 1}}
        assert fingerprint_key("p", a) == fingerprint_key("p", b)

    def test_list_order_matters(self):
        assert fingerprint_key("p", ["a", "b"]) != fingerprint_key("p", ["b", "a"])

    def test_set_order_independent(self):
        assert fingerprint_key("p", {"tags": {"b", "a", "c"}}) == fingerprint_key(
            "p", {"tags": {"c", "a", "b"}}
        )

    def test_tuple_equals_list(self):
        assert fingerprint_key("p", ("a", 1)) == fingerprint_key("p", ["a", 1])

    def test_different_values_different_keys(self):
        assert fingerprint_key("p", {"id": 1}) != fingerprint_key("p", {"id": 2})

    def test_different_prefixes_different_keys(self):
        assert fingerprint_key("description", {"id": 1}) != fingerprint_key("poster", {"id": 1})

    def test_bytes_hashed_by_content(self):
        assert fingerprint_key("d", b"abc") == fingerprint_key("d", bytearray(b"abc"))
        assert fingerprint_key("d", b"abc") != fingerprint_key("d", b"abd")

    def test_pydantic_model_matches_dict(self):
        option = ExhibitionOption(id=1, title="Quiet Light")
        assert fingerprint_key("e", option) == fingerprint_key(
            "e", {"title": "Quiet Light", "id": 1}
        )

    def test_plain_string_params(self):
        assert fingerprint_key("d", "a") == fingerprint_key("d", "a")
        assert fingerprint_key("d", "a") != fingerprint_key("d", "b")


class TestUnequalParams:
    def test_int_and_str_dict_keys_rejected(self):
        with pytest.raises(TypeError, match="string dict keys"):
            fingerprint_key("d", {1: "a"})

    def test_str_keyed_dict_still_works(self):
        assert fingerprint_key("d", {"1": "a"}).startswith("d:")

    def test_path_and_string_do_not_share_key(self):
        with pytest.raises(TypeError):
            fingerprint_key("d", Path("x"))
        assert fingerprint_key("d", "x").startswith("d:")

    def test_nested_unsupported_value_rejected(self):
        with pytest.raises(TypeError):
            fingerprint_key("d", {"when": object()})

    def test_str_enum_matches_its_value(self):
        assert fingerprint_key("d", {"kind": ArtifactKind.POSTER}) == fingerprint_key(
            "d", {"kind": "poster"}
        )
