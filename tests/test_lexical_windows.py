"""Tests for the lexical engine with Windows rules.

These run on every host; the flavor is injected rather than detected.
"""

from __future__ import annotations

import pytest

from pathtype import lexical
from pathtype.errors import RelationError
from pathtype.flavors import WindowsFlavor

FLAVOR = WindowsFlavor()


class TestVolumeName:
    """Tests for drive and UNC volume detection."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("c:/foo/bar", "c:"),
            ("c:", "c:"),
            ("2:", ""),
            ("", ""),
            ("\\\\\\host", ""),
            ("\\\\\\host\\", ""),
            ("\\\\\\host\\share", ""),
            ("\\\\\\host\\\\share", ""),
            ("\\\\host\\share", "\\\\host\\share"),
            ("//host/share", "//host/share"),
            ("\\\\host\\share\\", "\\\\host\\share"),
            ("//host/share/", "//host/share"),
            ("\\\\host\\share\\foo", "\\\\host\\share"),
            ("//host/share/foo", "//host/share"),
            ("\\\\host\\share\\\\foo\\\\\\bar\\\\\\\\baz", "\\\\host\\share"),
            ("//host/share//foo///bar////baz", "//host/share"),
            ("\\\\host\\share\\foo\\..\\bar", "\\\\host\\share"),
            ("//host/share/foo/../bar", "//host/share"),
        ],
    )
    def test_volume_name(self, path: str, expected: str) -> None:
        """Test the leading volume is found."""
        assert lexical.volume_name(FLAVOR, path) == expected


class TestIsAbs:
    """Tests for is_abs."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("C:\\", True),
            ("c\\", False),
            ("c::", False),
            ("c:", False),
            ("/", False),
            ("\\", False),
            ("\\Windows", False),
            ("c:a\\b", False),
            ("c:\\a\\b", True),
            ("c:/a/b", True),
            ("\\\\host\\share", True),
            ("\\\\host\\share\\", True),
            ("\\\\host\\share\\foo", True),
            ("//host/share/foo/bar", True),
        ],
    )
    def test_is_abs(self, path: str, expected: bool) -> None:
        """Test a path needs a volume and a root to be absolute."""
        assert lexical.is_abs(FLAVOR, path) is expected


class TestClean:
    """Tests for clean."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("c:", "c:."),
            ("c:\\", "c:\\"),
            ("c:\\abc", "c:\\abc"),
            ("c:abc\\..\\..\\.\\.\\..\\def", "c:..\\..\\def"),
            ("c:\\abc\\def\\..\\..", "c:\\"),
            ("c:\\..\\abc", "c:\\abc"),
            ("c:..\\abc", "c:..\\abc"),
            ("c:\\b:\\..\\..\\..\\d", "c:\\d"),
            ("\\", "\\"),
            ("/", "\\"),
            ("\\\\host\\share\\foo\\..\\bar", "\\\\host\\share\\bar"),
            ("//host/share/foo/../baz", "\\\\host\\share\\baz"),
            ("\\\\host\\share\\foo\\..\\..\\..\\..\\bar", "\\\\host\\share\\bar"),
            ("\\\\a\\b\\..\\c", "\\\\a\\b\\c"),
            ("\\\\a\\b", "\\\\a\\b"),
            ("//a/b", "\\\\a\\b"),
            (".\\c:", ".\\c:"),
            (".\\c:\\foo", ".\\c:\\foo"),
            (".\\c:foo", ".\\c:foo"),
            ("//abc", "\\abc"),
            ("///abc", "\\abc"),
            ("//abc//", "\\abc"),
            ("a/b/c", "a\\b\\c"),
            ("", "."),
        ],
    )
    def test_clean(self, path: str, expected: str) -> None:
        """Test clean keeps the volume and uses backslashes."""
        assert lexical.clean(FLAVOR, path) == expected

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("a/../c:", ".\\c:"),
            ("a\\..\\c:", ".\\c:"),
            ("a/../c:/a", ".\\c:\\a"),
            ("a/../../c:", "..\\c:"),
            ("foo:bar", "foo:bar"),
        ],
    )
    def test_colon_never_becomes_drive(self, path: str, expected: str) -> None:
        """Test cleaning cannot move an element with a colon to the front."""
        assert lexical.clean(FLAVOR, path) == expected

    def test_no_root_local_device(self) -> None:
        """Test cleaning cannot produce a \\??\\ prefix."""
        assert lexical.clean(FLAVOR, "/a/../??/a") == "\\.\\??\\a"


class TestJoin:
    """Tests for join."""

    @pytest.mark.parametrize(
        ("elems", "expected"),
        [
            (("directory", "file"), "directory\\file"),
            (("C:\\Windows\\", "System32"), "C:\\Windows\\System32"),
            (("C:\\Windows\\", ""), "C:\\Windows"),
            (("C:\\", "Windows"), "C:\\Windows"),
            (("C:", "a"), "C:a"),
            (("C:", "a\\b"), "C:a\\b"),
            (("C:", "a", "b"), "C:a\\b"),
            (("C:", "", "b"), "C:b"),
            (("C:", "", "", "b"), "C:b"),
            (("C:", ""), "C:."),
            (("C:", "", ""), "C:."),
            (("C:", "\\a"), "C:\\a"),
            (("C:", "", "\\a"), "C:\\a"),
            (("C:.", "a"), "C:a"),
            (("C:a", "b"), "C:a\\b"),
            (("C:a", "b", "d"), "C:a\\b\\d"),
            (("\\\\host\\share", "foo"), "\\\\host\\share\\foo"),
            (("\\\\host\\share\\foo",), "\\\\host\\share\\foo"),
            (("//host/share", "foo/bar"), "\\\\host\\share\\foo\\bar"),
            (("\\",), "\\"),
            (("\\", ""), "\\"),
            (("\\", "a"), "\\a"),
            (("\\", "a", "b"), "\\a\\b"),
            (("\\", "\\\\a\\b", "c"), "\\a\\b\\c"),
            (("a:\\b\\c", "x\\..\\y:\\..\\..\\z"), "a:\\b\\z"),
            (("\\", "??\\a"), "\\.\\??\\a"),
        ],
    )
    def test_join(self, elems: tuple[str, ...], expected: str) -> None:
        """Test join respects drive-relative paths and never creates UNC."""
        assert lexical.join(FLAVOR, *elems) == expected


class TestSplit:
    """Tests for split."""

    @pytest.mark.parametrize(
        ("path", "directory", "file"),
        [
            ("c:", "c:", ""),
            ("c:/", "c:/", ""),
            ("c:/foo", "c:/", "foo"),
            ("c:/foo/bar", "c:/foo/", "bar"),
            ("//host/share", "//host/share", ""),
            ("//host/share/", "//host/share/", ""),
            ("//host/share/foo", "//host/share/", "foo"),
            ("\\\\host\\share", "\\\\host\\share", ""),
            ("\\\\host\\share\\", "\\\\host\\share\\", ""),
            ("\\\\host\\share\\foo", "\\\\host\\share\\", "foo"),
            ("c:foo", "c:", "foo"),
        ],
    )
    def test_split(self, path: str, directory: str, file: str) -> None:
        """Test split never splits inside the volume."""
        assert lexical.split(FLAVOR, path) == (directory, file)


class TestBase:
    """Tests for base."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("c:\\", "\\"),
            ("c:.", "."),
            ("c:\\a\\b", "b"),
            ("c:a\\b", "b"),
            ("c:a\\b\\c", "c"),
            ("\\\\host\\share\\", "\\"),
            ("\\\\host\\share\\a", "a"),
            ("\\\\host\\share\\a\\b", "b"),
            ("a/b", "b"),
        ],
    )
    def test_base(self, path: str, expected: str) -> None:
        """Test base strips the volume first."""
        assert lexical.base(FLAVOR, path) == expected


class TestDir:
    """Tests for dir."""

    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("c:", "c:."),
            ("c:.", "c:."),
            ("c:\\a\\b", "c:\\a"),
            ("c:a\\b", "c:a"),
            ("c:a\\b\\c", "c:a\\b"),
            ("\\\\host\\share", "\\\\host\\share"),
            ("\\\\host\\share\\", "\\\\host\\share\\"),
            ("\\\\host\\share\\a", "\\\\host\\share\\"),
            ("\\\\host\\share\\a\\b", "\\\\host\\share\\a"),
        ],
    )
    def test_dir(self, path: str, expected: str) -> None:
        """Test dir keeps the volume."""
        assert lexical.dir(FLAVOR, path) == expected


class TestRel:
    """Tests for rel."""

    @pytest.mark.parametrize(
        ("base", "target", "expected"),
        [
            ("C:a\\b\\c", "C:a/b/d", "..\\d"),
            ("C:\\Projects", "c:\\projects\\src", "src"),
            ("C:\\Projects", "c:\\projects", "."),
            ("C:\\Projects\\a\\..", "c:\\projects", "."),
            ("\\\\host\\share", "\\\\host\\share\\file.txt", "file.txt"),
        ],
    )
    def test_rel(self, base: str, target: str, expected: str) -> None:
        """Test rel ignores case and handles volumes."""
        assert lexical.rel(FLAVOR, base, target) == expected

    @pytest.mark.parametrize(("base", "target"), [("C:\\", "D:\\"), ("C:", "D:")])
    def test_rel_different_volumes(self, base: str, target: str) -> None:
        """Test rel refuses to cross volumes."""
        with pytest.raises(RelationError):
            lexical.rel(FLAVOR, base, target)


class TestSplitList:
    """Tests for split_list."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("", []),
            ("a;b", ["a", "b"]),
            ('"a"', ["a"]),
            ('";"', [";"]),
            ('"a;b"', ["a;b"]),
            ('";";', [";", ""]),
            ('";"', [";"]),
            (';";"', ["", ";"]),
            ('a";"b', ["a;b"]),
            ('a; ""b', ["a", " b"]),
            ('"a;b', ["a;b"]),
            ('""a;b', ["a", "b"]),
            ('"""a;b', ["a;b"]),
            ('""""a;b', ["a", "b"]),
            ('a";b', ["a;b"]),
            ('a;b";c', ["a", "b;c"]),
            ('"a";b";c', ["a", "b;c"]),
        ],
    )
    def test_split_list(self, value: str, expected: list[str]) -> None:
        """Test split_list honours double quotes."""
        assert lexical.split_list(FLAVOR, value) == expected


class TestSlashes:
    """Tests for to_slash and from_slash."""

    def test_to_slash(self) -> None:
        """Test backslashes become slashes."""
        assert lexical.to_slash(FLAVOR, "c:\\a\\b") == "c:/a/b"

    def test_from_slash(self) -> None:
        """Test slashes become backslashes."""
        assert lexical.from_slash(FLAVOR, "c:/a/b") == "c:\\a\\b"


class TestHasMeta:
    """Tests for has_meta."""

    def test_backslash_is_not_meta(self) -> None:
        """Test the separator is not treated as an escape."""
        assert lexical.has_meta(FLAVOR, "a\\b") is False
        assert lexical.has_meta(FLAVOR, "a\\*") is True


class TestAbsPath:
    """Tests for abs_path."""

    def test_relative(self) -> None:
        """Test relative paths are joined onto the working directory."""
        assert lexical.abs_path(FLAVOR, "a/b", "C:\\work") == "C:\\work\\a\\b"

    def test_absolute(self) -> None:
        """Test absolute paths are only cleaned."""
        assert lexical.abs_path(FLAVOR, "D:/x/../y", "C:\\work") == "D:\\y"
