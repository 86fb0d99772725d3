"""Tests for the stage transition engine."""

import pytest

from exchange_api.app.core.errors import InvalidStateError, InvalidTransitionError, LockedError
from exchange_api.app.schemas.entry import Stage
from exchange_api.app.services.stage_machine import TRANSITIONS, allowed_transitions, transition


@pytest.fixture
def voting_exchange(make_exchange, make_entry, make_vote):
    return make_exchange(
        stage=Stage.VOTING,
        submissions={"alice": [make_entry("A")], "bob": [make_entry("B")]},
        votes={"bob": [make_vote(1, "A")]},
    )


class TestTransitionTable:
    """Test the declared transitions."""

    def test_table_contents(self):
        assert set(TRANSITIONS) == {
            (Stage.SUBMISSION, Stage.VOTING),
            (Stage.VOTING, Stage.SUBMISSION),
            (Stage.VOTING, Stage.SELECTION),
            (Stage.SELECTION, Stage.VOTING),
            (Stage.SELECTION, Stage.FROZEN),
        }

    def test_allowed_transitions(self):
        assert allowed_transitions(Stage.VOTING) == [Stage.SUBMISSION, Stage.SELECTION]
        assert allowed_transitions(Stage.FROZEN) == []


class TestTransition:
    """Test transition guards and effects."""

    def test_submission_to_voting_requires_submissions(self, make_exchange):
        with pytest.raises(InvalidStateError):
            transition(make_exchange(), Stage.VOTING)

    def test_submission_to_voting(self, make_exchange, make_entry):
        exchange = make_exchange(submissions={"alice": [make_entry("A")]})

        updated = transition(exchange, Stage.VOTING)

        assert updated.stage == Stage.VOTING
        assert exchange.stage == Stage.SUBMISSION

    def test_voting_to_submission_clears_votes(self, voting_exchange):
        updated = transition(voting_exchange, Stage.SUBMISSION)

        assert updated.stage == Stage.SUBMISSION
        assert updated.votes == {}
        assert updated.submissions == voting_exchange.submissions

    def test_voting_to_selection_requires_votes(self, voting_exchange):
        voting_exchange.votes = {}

        with pytest.raises(InvalidStateError):
            transition(voting_exchange, Stage.SELECTION)

    def test_voting_to_selection_computes_results(self, voting_exchange, make_entry):
        updated = transition(voting_exchange, Stage.SELECTION)

        assert updated.stage == Stage.SELECTION
        assert updated.results == {"bob": [make_entry("A")]}
        assert voting_exchange.results == {}

    def test_selection_to_voting_clears_results(self, voting_exchange):
        selection = transition(voting_exchange, Stage.SELECTION)

        updated = transition(selection, Stage.VOTING)

        assert updated.stage == Stage.VOTING
        assert updated.results == {}
        assert updated.votes == selection.votes

    def test_selection_to_frozen_keeps_results(self, voting_exchange):
        selection = transition(voting_exchange, Stage.SELECTION)

        frozen = transition(selection, Stage.FROZEN)

        assert frozen.stage == Stage.FROZEN
        assert frozen.results == selection.results

    @pytest.mark.parametrize("requested", list(Stage))
    def test_frozen_rejects_everything(self, make_exchange, requested):
        exchange = make_exchange(stage=Stage.FROZEN)

        with pytest.raises(LockedError):
            transition(exchange, requested)

    @pytest.mark.parametrize("stage", [Stage.SUBMISSION, Stage.VOTING, Stage.SELECTION])
    def test_same_stage_is_rejected(self, make_exchange, stage):
        with pytest.raises(InvalidTransitionError):
            transition(make_exchange(stage=stage), stage)

    @pytest.mark.parametrize(
        "current, requested",
        [
            (Stage.SUBMISSION, Stage.SELECTION),
            (Stage.SUBMISSION, Stage.FROZEN),
            (Stage.VOTING, Stage.FROZEN),
            (Stage.SELECTION, Stage.SUBMISSION),
        ],
    )
    def test_pairs_outside_table_are_rejected(self, make_exchange, make_entry, current, requested):
        exchange = make_exchange(stage=current, submissions={"alice": [make_entry("A")]})

        with pytest.raises(InvalidTransitionError):
            transition(exchange, requested)

    def test_rejection_leaves_exchange_untouched(self, voting_exchange):
        before = voting_exchange.model_copy(deep=True)

        with pytest.raises(InvalidTransitionError):
            transition(voting_exchange, Stage.FROZEN)

        assert voting_exchange == before
