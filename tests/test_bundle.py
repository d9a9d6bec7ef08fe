"""Tests for the static file bundle."""

from lorikeet_dash.infrastructure.static import StaticBundle
from lorikeet_dash.infrastructure.static.bundle import DEFAULT_ROOT


def test_directory_paths_map_to_index(static_dir) -> None:
    bundle = StaticBundle(static_dir)

    assert bundle.get("/").path == "index.html"
    assert bundle.get("").path == "index.html"
    assert bundle.index().media_type == "text/html"


def test_missing_files_are_none(static_dir) -> None:
    assert StaticBundle(static_dir).get("/nope.css") is None


def test_paths_cannot_escape_the_root(static_dir) -> None:
    bundle = StaticBundle(static_dir)

    assert bundle.get("/../secret.txt") is None
    assert bundle.get("..%2Fsecret.txt") is None


def test_unknown_extensions_are_octet_stream(static_dir) -> None:
    (static_dir / "blob.zzzunknown").write_bytes(b"\x00\x01")

    asset = StaticBundle(static_dir).get("/blob.zzzunknown")

    assert asset.media_type == "application/octet-stream"
    assert asset.content == b"\x00\x01"


def test_bundled_front_end_is_present() -> None:
    bundle = StaticBundle(DEFAULT_ROOT)

    assert b"Lorikeet Dashboard" in bundle.index().content
    assert bundle.get("/app.js") is not None
