import pytest

import ntfbingo.cards
import ntfbingo.db
from ntfbingo.cards.batch import generate
from ntfbingo.db.models import MovieEntry


def test_lazy_exports_resolve_to_module_objects():
    assert ntfbingo.cards.generate is generate
    assert ntfbingo.db.MovieEntry is MovieEntry
    for name in ntfbingo.cards.__all__:
        assert getattr(ntfbingo.cards, name) is not None
    for name in ntfbingo.db.__all__:
        assert getattr(ntfbingo.db, name) is not None


def test_unknown_export_raises_attribute_error():
    with pytest.raises(AttributeError):
        ntfbingo.cards.not_a_thing
    with pytest.raises(AttributeError):
        ntfbingo.db.not_a_thing
