import pytest

from helpers import EDIT, KEEP, LOOKUP, QUIT, FakeLookup, ScriptedPrompter

from ntfbingo.db.models import MovieEntry
from ntfbingo.db.session import CANCEL, OPEN_STILL, Aborted, Continue, EditSession, SessionClosedError, SessionState
from ntfbingo.lookup.tmdb import Candidate

ALIEN = MovieEntry("stills/alien 1979.jpg")
THING = MovieEntry("stills/the thing (1982).jpg")
HEAT = MovieEntry("stills/heat.jpg", "Heat", "1995")


def test_keep_returns_entry_unchanged():
    session = EditSession(ScriptedPrompter(actions=[KEEP]))
    assert session.edit_entry(HEAT) == Continue([HEAT])
    assert session.state is SessionState.PER_ENTRY_EDIT


def test_edit_uses_prompted_fields():
    session = EditSession(ScriptedPrompter(actions=[EDIT], edits=[("Heat", "1996")]))
    assert session.edit_entry(HEAT) == Continue([MovieEntry("stills/heat.jpg", "Heat", "1996")])


def test_quit_returns_aborted_with_nothing():
    session = EditSession(ScriptedPrompter(actions=[QUIT]))
    assert session.edit_entry(HEAT) == Aborted([])


def test_lookup_picks_candidate():
    lookup = FakeLookup(results=[Candidate("Alien", "1979"), Candidate("Aliens", "1986")])
    prompter = ScriptedPrompter(actions=[LOOKUP], candidates=[1])
    session = EditSession(prompter, lookup=lookup)
    entry = MovieEntry("stills/a.jpg", "ALIENS", "")
    assert session.edit_entry(entry) == Continue([MovieEntry("stills/a.jpg", "Aliens", "1986")])
    assert lookup.queries == ["aliens"]


def test_lookup_open_still_then_pick():
    lookup = FakeLookup(results=[Candidate("Alien", "1979")])
    prompter = ScriptedPrompter(actions=[LOOKUP], candidates=[OPEN_STILL, OPEN_STILL, 0])
    session = EditSession(prompter, lookup=lookup)
    outcome = session.edit_entry(MovieEntry("stills/a.jpg", "Alien", ""))
    assert outcome == Continue([MovieEntry("stills/a.jpg", "Alien", "1979")])
    assert prompter.opened == ["stills/a.jpg", "stills/a.jpg"]


def test_lookup_cancel_goes_back_to_prompt():
    lookup = FakeLookup(results=[Candidate("Alien", "1979")])
    prompter = ScriptedPrompter(actions=[LOOKUP, KEEP], candidates=[CANCEL])
    session = EditSession(prompter, lookup=lookup)
    assert session.edit_entry(HEAT) == Continue([HEAT])
    assert len(prompter.shown) == 2


@pytest.mark.parametrize("lookup,notice", [
    (FakeLookup(error="HTTP 401"), "Lookup failed: HTTP 401"),
    (FakeLookup(results=[]), "No matches found"),
    (None, "Title lookup is not configured"),
])
def test_lookup_failures_fall_back_to_prompt(lookup, notice):
    prompter = ScriptedPrompter(actions=[LOOKUP, EDIT], edits=[("Heat", "1995")])
    session = EditSession(prompter, lookup=lookup)
    assert session.edit_entry(HEAT) == Continue([HEAT])
    assert prompter.notices == [notice]


def test_run_list_guesses_only_incomplete_entries():
    prompter = ScriptedPrompter(actions=[KEEP, KEEP, KEEP])
    session = EditSession(prompter)
    outcome = session.run_list([ALIEN, THING, HEAT])
    assert outcome == Continue([
        MovieEntry("stills/alien 1979.jpg", "Alien", "1979"),
        MovieEntry("stills/the thing (1982).jpg", "The Thing", "1982"),
        HEAT,
    ])
    assert prompter.shown[2] is HEAT


def test_run_list_backs_up_after_each_entry():
    backups = []
    prompter = ScriptedPrompter(actions=[KEEP, EDIT, KEEP], edits=[("The Thing", "1951")])
    session = EditSession(prompter, backup_writer=backups.append)
    session.run_list([ALIEN, THING, HEAT])
    assert [len(b) for b in backups] == [1, 2, 3]
    assert backups[1][1] == MovieEntry(THING.file_path, "The Thing", "1951")


def test_run_list_quit_keeps_completed_edits_only():
    backups = []
    prompter = ScriptedPrompter(actions=[EDIT, QUIT], edits=[("Alien", "1979")])
    session = EditSession(prompter, backup_writer=backups.append)
    outcome = session.run_list([ALIEN, THING, HEAT])
    assert outcome == Aborted([MovieEntry(ALIEN.file_path, "Alien", "1979")])
    assert len(backups) == 1
    assert session.begin_finalize() == outcome.movies


def test_no_edits_after_finalize():
    prompter = ScriptedPrompter(actions=[KEEP])
    session = EditSession(prompter)
    session.begin_finalize()
    with pytest.raises(SessionClosedError):
        session.edit_entry(HEAT)


def test_finalize_mid_prompt_rejects_the_answer():
    prompter = ScriptedPrompter(actions=[KEEP])
    session = EditSession(prompter)
    prompter.on_action = lambda movie: session.begin_finalize()
    with pytest.raises(SessionClosedError):
        session.run_list([HEAT])
    assert session.progress == []


def test_run_search_edits_picked_entries():
    prompter = ScriptedPrompter(
        searches=[THING.file_path, "stills/nope.jpg", THING.file_path],
        actions=[EDIT, EDIT],
        edits=[("The Thing", "1951"), ("The Thing", "1982")],
        confirms=[True, True, False],
    )
    backups = []
    session = EditSession(prompter, backup_writer=backups.append)
    outcome = session.run_search([ALIEN, THING, HEAT])
    assert outcome == Continue([MovieEntry(THING.file_path, "The Thing", "1982")])
    assert prompter.notices == ["No entry for stills/nope.jpg"]
    # second edit starts from the first one
    assert prompter.shown[1] == MovieEntry(THING.file_path, "The Thing", "1951")
    assert len(backups) == 2


def test_run_search_quit():
    prompter = ScriptedPrompter(
        searches=[HEAT.file_path, ALIEN.file_path],
        actions=[EDIT, QUIT],
        edits=[("Heat", "1986")],
        confirms=[True],
    )
    session = EditSession(prompter)
    outcome = session.run_search([ALIEN, HEAT])
    assert outcome == Aborted([MovieEntry(HEAT.file_path, "Heat", "1986")])
