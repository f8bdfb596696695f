import pytest

from edgewidgets.icon_lookup import clear_cache, find_icon, rsplit_file_at_dot


@pytest.fixture(autouse=True)
def _fresh_cache():
    clear_cache()
    yield
    clear_cache()


@pytest.fixture
def icon_dir(tmp_path):
    for name in ("foo.png", "bar.svg", "baz.txt", "qux.xpm", ".hidden"):
        (tmp_path / name).write_bytes(b"")
    sub = tmp_path / "sub"
    sub.mkdir()
    (sub / "deep.png").write_bytes(b"")
    return tmp_path


@pytest.mark.parametrize(
    "name, expected",
    [
        ("..", ("..", None)),
        ("a.png", ("a", "png")),
        ("a.b.svg", ("a.b", "svg")),
        ("noext", (None, "noext")),
        (".bashrc", (".bashrc", None)),
    ],
)
def test_rsplit_file_at_dot(name, expected):
    assert rsplit_file_at_dot(name) == expected


def test_find_png_and_svg(icon_dir):
    assert find_icon(str(icon_dir), "foo") == icon_dir / "foo.png"
    assert find_icon(str(icon_dir), "bar") == icon_dir / "bar.svg"


def test_other_extensions_ignored(icon_dir):
    assert find_icon(str(icon_dir), "baz") is None
    assert find_icon(str(icon_dir), "qux") is None


def test_no_recursion_past_first_level(icon_dir):
    assert find_icon(str(icon_dir), "deep") is None


def test_missing_directory(tmp_path):
    assert find_icon(str(tmp_path / "missing"), "foo") is None


def test_result_is_cached(icon_dir):
    found = find_icon(str(icon_dir), "foo")
    (icon_dir / "foo.png").unlink()
    assert find_icon(str(icon_dir), "foo") == found
    clear_cache()
    assert find_icon(str(icon_dir), "foo") is None


def test_misses_are_not_cached(icon_dir):
    assert find_icon(str(icon_dir), "late") is None
    (icon_dir / "late.svg").write_bytes(b"")
    assert find_icon(str(icon_dir), "late") == icon_dir / "late.svg"