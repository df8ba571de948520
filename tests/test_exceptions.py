"""Tests for netlist_rebuild.exceptions module."""

import pytest

from netlist_rebuild.exceptions import (
    CatalogError,
    ConfigurationError,
    FailureKind,
    LibraryUnavailableError,
    NetlistRebuildError,
    ParseError,
    ParseErrorKind,
)


class TestNetlistRebuildError:
    """Tests for the base exception class."""

    def test_basic_message(self):
        err = NetlistRebuildError("Something went wrong")
        assert str(err) == "Something went wrong"
        assert err.message == "Something went wrong"
        assert err.context == {}
        assert err.suggestions == []

    def test_with_context(self):
        err = NetlistRebuildError(
            "Rebuild failed",
            context={"file": "board.enet", "component": "C12"},
        )
        msg = str(err)
        assert "Context:" in msg
        assert "file: board.enet" in msg
        assert "component: C12" in msg

    def test_with_context_and_suggestions(self):
        err = NetlistRebuildError(
            "Device library missing",
            context={"library": "none"},
            suggestions=["Load a device library", "Pass --library"],
        )
        msg = str(err)
        assert msg.index("Context:") < msg.index("Suggestions:")
        assert "  - Pass --library" in msg


class TestParseError:
    """Tests for ParseError."""

    def test_default_kind(self):
        err = ParseError("Unexpected token")
        assert err.kind is ParseErrorKind.MALFORMED_FORMAT
        assert isinstance(err, NetlistRebuildError)

    def test_file_path_added_to_context(self):
        err = ParseError(
            "Unsupported netlist file type: .txt",
            kind=ParseErrorKind.UNSUPPORTED_EXTENSION,
            file_path="board.txt",
        )
        assert err.context["file"] == "board.txt"
        assert err.kind is ParseErrorKind.UNSUPPORTED_EXTENSION

    def test_explicit_file_context_wins(self):
        err = ParseError("bad", context={"file": "a.json"}, file_path="b.json")
        assert err.context["file"] == "a.json"


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls", [ParseError, LibraryUnavailableError, ConfigurationError, CatalogError]
    )
    def test_subclasses_base(self, cls):
        assert issubclass(cls, NetlistRebuildError)

    def test_catch_all_with_base(self):
        with pytest.raises(NetlistRebuildError):
            raise LibraryUnavailableError("no namespace")


def test_failure_kinds_are_distinct():
    values = [kind.value for kind in FailureKind]
    assert len(values) == len(set(values)) == 6
