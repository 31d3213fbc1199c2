"""Shared fixtures: an on-disk storage volume."""

import json

import pytest


def write_asset(root, storage_name, files, manifest=None):
    """Create ``root/storage_name`` with the given files and optional package.json."""
    asset_dir = root / storage_name
    asset_dir.mkdir(parents=True)
    for relative, content in files.items():
        target = asset_dir / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    if manifest is not None:
        (asset_dir / "package.json").write_text(json.dumps(manifest), encoding="utf-8")
    return asset_dir


@pytest.fixture
def volume(tmp_path):
    """A volume holding three versions of bob and one of alice."""
    root = tmp_path / "volume"
    root.mkdir()
    for version in ("1.3.3", "1.3.4", "2.0.0"):
        write_asset(
            root,
            f"bob@{version}",
            {"index.css": f"/* bob {version} */\nbody {{\n  color: red;\n}}\n",
             "dist/index.js": f"var version = '{version}';\n"},
            manifest={"name": "bob", "style": "index.css"},
        )
    write_asset(root, "alice@0.1.0", {"alice.js": "alert(1);\n"}, manifest={"main": "./alice.js"})
    write_asset(root, "nodefault@1.0.0", {"a.js": "a();\n"})
    (root / "404.html").write_text("<h1>not here</h1>", encoding="utf-8")
    return root
