"""Tests for the public exchange view."""

import pytest

from exchange_api.app.schemas.entry import Stage
from exchange_api.app.services.projection import project, voting_options


@pytest.fixture
def populated(make_exchange, make_entry, make_vote):
    def _make(stage):
        return make_exchange(
            stage=stage,
            submissions={
                "alice": [make_entry("A", "B"), make_entry("C")],
                "bob": [make_entry("D"), make_entry("C")],
            },
            votes={"carol": [make_vote(1, "D")]},
            results={"carol": [make_entry("D")]} if stage in (Stage.SELECTION, Stage.FROZEN) else {},
        )

    return _make


class TestProject:
    """Test project for each stage."""

    @pytest.mark.parametrize("stage", [Stage.SUBMISSION, Stage.SELECTION])
    def test_only_basics_outside_voting_and_frozen(self, populated, stage):
        view = project(populated(stage), "alice")

        assert view.model_dump() == {
            "title": "Books",
            "id": 1,
            "stage": stage,
            "submissions": None,
            "results": None,
        }

    def test_voting_lists_all_entries_once(self, populated, make_entry):
        view = project(populated(Stage.VOTING))

        assert view.submissions == [make_entry("A", "B"), make_entry("C"), make_entry("D")]
        assert view.results is None

    def test_voting_hides_requesters_own_entries(self, populated, make_entry):
        view = project(populated(Stage.VOTING), "alice")

        assert view.submissions == [make_entry("D")]

    def test_unknown_requester_sees_everything(self, populated, make_entry):
        view = project(populated(Stage.VOTING), "zoe")

        assert view.submissions == [make_entry("A", "B"), make_entry("C"), make_entry("D")]

    def test_frozen_shows_results(self, populated, make_entry):
        view = project(populated(Stage.FROZEN))

        assert view.results == {"carol": [make_entry("D")]}
        assert view.submissions is None

    @pytest.mark.parametrize("stage", list(Stage))
    def test_never_leaks_secret_or_votes(self, populated, stage):
        dumped = project(populated(stage), "alice").model_dump_json()

        assert "RarityBoopsDerpy" not in dumped
        assert "secret" not in dumped
        assert "votes" not in dumped


def test_voting_options_without_submissions(make_exchange):
    assert voting_options(make_exchange(stage=Stage.VOTING), "alice") == []
