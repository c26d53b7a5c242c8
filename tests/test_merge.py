from ntfbingo.db.merge import merge, unknown_paths
from ntfbingo.db.models import MovieEntry


def test_merge_replaces_in_original_position():
    edited = [MovieEntry("a", "X", "1999")]
    original = [MovieEntry("a", "", ""), MovieEntry("b", "Y", "2001")]
    assert merge(edited, original) == [MovieEntry("a", "X", "1999"), MovieEntry("b", "Y", "2001")]


def test_merge_does_not_mutate_inputs():
    edited = [MovieEntry("b", "New", "2010")]
    original = [MovieEntry("a"), MovieEntry("b"), MovieEntry("c")]
    snapshot = list(original)
    result = merge(edited, original)
    assert original == snapshot
    assert result is not original
    assert [m.file_path for m in result] == ["a", "b", "c"]


def test_merge_ignores_entries_not_in_original():
    edited = [MovieEntry("ghost", "Boo", "1990"), MovieEntry("a", "A", "2000")]
    original = [MovieEntry("a")]
    assert merge(edited, original) == [MovieEntry("a", "A", "2000")]
    assert unknown_paths(edited, original) == ["ghost"]


def test_merge_with_nothing_edited_is_identity():
    original = [MovieEntry("a", "A", "2000"), MovieEntry("b")]
    assert merge([], original) == original
    assert unknown_paths([], original) == []
