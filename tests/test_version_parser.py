"""Tests for asset identifier parsing and serialization."""

import pytest

from versioning.errors import IncompleteIdentifier, UnparsableCatalogEntry
from versioning.models import AssetIdentifier, Version
from versioning.parser import (
    parse_from_storage_name,
    parse_from_url,
    parse_version,
    serialize_asset_name,
)


class TestParseVersion:
    """Tests for partial version parsing."""

    def test_missing_version_is_unconstrained(self):
        assert parse_version(None) == Version()
        assert parse_version("") == Version()
        assert parse_version(None).is_unconstrained

    def test_partial_versions(self):
        assert parse_version("1") == Version(1, None, None)
        assert parse_version("1.2") == Version(1, 2, None)
        assert parse_version("1.2.3") == Version(1, 2, 3)

    def test_zero_is_present_not_absent(self):
        version = parse_version("0.0.0")
        assert version == Version(0, 0, 0)
        assert version.is_precise

    def test_malformed_token_degrades_following_components(self):
        """A non-numeric token makes it and every later component absent."""
        assert parse_version("1.x.3") == Version(1, None, None)
        assert parse_version("latest") == Version()
        assert parse_version("1.2.beta") == Version(1, 2, None)
        assert parse_version("-1.2.3") == Version()

    def test_extra_components_are_ignored(self):
        assert parse_version("1.2.3.4") == Version(1, 2, 3)


class TestParseFromUrl:
    """Tests for parsing request URIs."""

    def test_bare_name(self):
        asset = parse_from_url("/bob")
        assert asset == AssetIdentifier(name="bob", version=Version(), path=None)

    def test_name_with_partial_version(self):
        asset = parse_from_url("/bob@1")
        assert asset.name == "bob"
        assert asset.version == Version(1, None, None)
        assert asset.path is None
        assert not asset.is_version_precise

    def test_precise_version_with_path(self):
        asset = parse_from_url("/bob@1.3.3/dist/index.css")
        assert asset.name == "bob"
        assert asset.version == Version(1, 3, 3)
        assert asset.path == "dist/index.css"
        assert asset.is_uri_complete

    def test_trailing_slash_means_no_path(self):
        asset = parse_from_url("/bob@1.3.3/")
        assert asset.path is None
        assert not asset.is_uri_complete

    def test_name_without_version_with_path(self):
        asset = parse_from_url("/bob/index.js")
        assert asset.name == "bob"
        assert asset.version.is_unconstrained
        assert asset.path == "index.js"

    def test_query_string_is_dropped(self):
        asset = parse_from_url("/bob@1.2/index.js?v=3")
        assert asset.path == "index.js"
        assert asset.version == Version(1, 2, None)

    def test_percent_encoded_name(self):
        asset = parse_from_url("/my%20lib@2")
        assert asset.name == "my lib"

    def test_each_segment_is_decoded_once(self):
        asset = parse_from_url("/bob%25401/dist/index.js")
        assert asset.name == "bob%401"
        assert asset.version.is_unconstrained
        assert asset.path == "dist/index.js"

    def test_encoded_at_sign_is_part_of_the_name(self):
        asset = parse_from_url("/bob%401/x.js")
        assert asset.name == "bob@1"
        assert asset.version.is_unconstrained

    def test_encoded_path_is_decoded(self):
        asset = parse_from_url("/bob@1/a%20b/%C3%A9.js")
        assert asset.path == "a b/\u00e9.js"

    def test_malformed_version_is_lenient(self):
        asset = parse_from_url("/bob@one/index.js")
        assert asset.name == "bob"
        assert asset.version.is_unconstrained

    def test_empty_uri_has_no_name(self):
        assert parse_from_url("/").name == ""
        assert parse_from_url("").name == ""


class TestStorageNames:
    """Tests for storage name parsing and serialization."""

    def test_parse_storage_name(self):
        asset = parse_from_storage_name("bob@1.3.3")
        assert asset == AssetIdentifier(name="bob", version=Version(1, 3, 3))

    @pytest.mark.parametrize("storage_name", [
        "bob",
        "bob@",
        "@1.0.0",
        "bob@1.0",
        "bob@1.x.0",
        "bob@1.0.0-beta.1",
        "bob@01.0.0",
    ])
    def test_unparsable_storage_names(self, storage_name):
        with pytest.raises(UnparsableCatalogEntry):
            parse_from_storage_name(storage_name)

    def test_serialize_precise_identifier(self):
        asset = AssetIdentifier(name="bob", version=Version(1, 3, 3))
        assert serialize_asset_name(asset) == "bob@1.3.3"

    def test_serialize_then_parse_gives_same_identifier(self):
        asset = AssetIdentifier(name="bob", version=Version(1, 3, 3))
        assert parse_from_storage_name(serialize_asset_name(asset)) == asset

    def test_serialize_partial_identifier_fails(self):
        with pytest.raises(IncompleteIdentifier):
            serialize_asset_name(AssetIdentifier(name="bob", version=Version(1, 3)))

    def test_serialize_without_name_fails(self):
        with pytest.raises(IncompleteIdentifier):
            serialize_asset_name(AssetIdentifier(name="", version=Version(1, 3, 3)))
