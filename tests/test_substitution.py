from __future__ import annotations

from uuid import UUID

import pytest

from libkit.errors import EmptySearchTargetError
from libkit.substitution import new_placeholder, substitute, substitute_many


def test_substitute_replaces_every_occurrence():
    assert substitute("one two one", "one", "three") == "three two three"


def test_substitute_without_match_returns_source():
    assert substitute("hello world", "xyz", "abc") == "hello world"


def test_substitute_deletes_when_replacement_is_empty():
    assert substitute("a-b-a", "a", "") == "-b-"


def test_substitute_empty_source():
    assert substitute("", "a", "b") == ""


def test_substitute_same_value_is_noop():
    assert substitute("foo bar foo", "foo", "foo") == "foo bar foo"


def test_substitute_replacement_containing_target_does_not_cascade():
    source = "foo bar foo baz foo"
    result = substitute(source, "foo", "foofoo")

    assert result == "foofoo bar foofoo baz foofoo"
    assert result.count("foo") == 2 * source.count("foo")


def test_substitute_collapses_longer_target():
    result = substitute("foofoo and foofoo", "foofoo", "foo")

    assert result == "foo and foo"
    assert all(not "\ue000" <= char <= "\uf8ff" for char in result)


def test_substitute_handles_prefixed_names():
    result = substitute("Hello, @name! @name says hi.", "@name", "@name@name")

    assert result == "Hello, @name@name! @name@name says hi."


@pytest.mark.parametrize(
    "source, from_, to",
    [
        ("@example/vue-lib and @example/vue-lib/forms", "@example/vue-lib", "@acme/widgets"),
        ("Copyright (c) Example", "Example", "Acme"),
        ("aaaa", "aa", "b"),
    ],
)
def test_substitute_leaves_no_target_behind(source, from_, to):
    assert from_ not in substitute(source, from_, to)


def test_substitute_rejects_empty_target():
    with pytest.raises(EmptySearchTargetError):
        substitute("anything", "", "x")

    with pytest.raises(ValueError):
        substitute("anything", "", "x")


def test_new_placeholder_does_not_occur_in_source():
    source = "some text"
    placeholder = new_placeholder(source)
    assert placeholder not in source
    assert placeholder != new_placeholder(source)


def test_substitute_many_applies_pairs_in_order():
    result = substitute_many("vue-lib by vue", [("vue-lib", "ui-kit"), ("vue", "Vue Team"), ("same", "same")])
    assert result == "ui-kit by Vue Team"


def test_substitute_deletes_single_characters_repeatedly():
    for _ in range(20):
        assert substitute("a-b-a", "a", "") == "-b-"


@pytest.mark.parametrize(
    "source, from_, to, expected",
    [
        ("x\x00y\x00", "\x00", "-", "x-y-"),
        ("2024 and 2025", "2024", "2026", "2026 and 2025"),
        ("f0 e1", "f", "ff", "ff0 e1"),
        ("marker \ue000 kept", "kept", "\ue001", "marker \ue000 \ue001"),
    ],
)
def test_substitute_targets_that_look_like_markers(source, from_, to, expected):
    assert substitute(source, from_, to) == expected


def test_substitute_with_predictable_uuid(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr("libkit.substitution.uuid4", lambda: UUID("aaaaaaaa-aaaa-4aaa-aaaa-aaaaaaaaaaaa"))

    assert substitute("aaaa-b-aa", "aa", "a") == "aa-b-a"
    assert substitute("a-b-a", "a", "") == "-b-"


def test_new_placeholder_avoids_characters_of_values():
    placeholder = new_placeholder("", "\ue000\ue001", "\ue002")

    assert not set(placeholder) & {"\ue000", "\ue001", "\ue002"}
    assert len(placeholder) == 34


def test_new_placeholder_regenerates_on_collision(monkeypatch: pytest.MonkeyPatch):
    uuids = iter([UUID(int=0), UUID(int=0), UUID(int=1)])
    monkeypatch.setattr("libkit.substitution.uuid4", lambda: next(uuids))

    taken = new_placeholder("")
    placeholder = new_placeholder(f"prefix {taken} suffix")

    assert placeholder != taken
    assert placeholder not in f"prefix {taken} suffix"
