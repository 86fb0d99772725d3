"""
Vote tally and assignment of entries to participants.

Results are computed in three steps:

1. ``tally_votes`` counts, for every entry that appears on a ballot, how
   many ballots contain it and which priorities it was given.  Ballots
   are read in voter‑name order so the first‑seen order of entries is
   deterministic.  An entry listed twice on one ballot counts once, with
   its best priority.
2. ``rank_entries`` scores each entry as::

       score = factor * count / max_count
               + (1 - factor) * (worst - mean_priority) / (worst - best)

   where ``best`` and ``worst`` are the smallest and largest priorities
   present in the whole tally (lower priority is preferred).  When every
   vote has the same priority the priority term is ``1.0`` for all
   entries.  Higher scores rank first; ties keep first‑seen order.
3. ``compute_results`` hands out entries to the voters in rounds.  Each
   round every voter, in name order, takes the best entry still
   available to them: not one of their own submissions, not already
   assigned to them, and not used up.  An entry can be assigned to as
   many participants as there were ballots selecting it.  Nobody holds
   more than ``user_max`` entries.

   Assignment runs in two passes.  The first only hands out entries
   from each voter's own ballot; once nobody can take anything more
   from their ballot, the second pass fills the remaining slots with
   whatever capacity is left.  A voter who selected an entry therefore
   always gets it before someone who did not.

Everything here is pure; the stage machine and ``ExchangeService`` call
``compute_results`` and store what it returns.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Sequence, Set

from ..schemas.entry import Entry, Vote


@dataclass
class EntryTally:
    entry: Entry
    order: int
    count: int = 0
    priorities: List[int] = field(default_factory=list)
    score: float = 0.0

    @property
    def mean_priority(self) -> float:
        return sum(self.priorities) / len(self.priorities)


def tally_votes(votes: Mapping[str, Sequence[Vote]]) -> List[EntryTally]:
    """Aggregate ballots into one ``EntryTally`` per distinct entry, in first‑seen order."""
    tallies: Dict[Entry, EntryTally] = {}
    for voter in sorted(votes):
        best: Dict[Entry, int] = {}
        for vote in votes[voter]:
            if vote.entry not in best or vote.priority < best[vote.entry]:
                best[vote.entry] = vote.priority
        for entry, priority in best.items():
            tally = tallies.get(entry)
            if tally is None:
                tally = tallies[entry] = EntryTally(entry=entry, order=len(tallies))
            tally.count += 1
            tally.priorities.append(priority)
    return list(tallies.values())


def rank_entries(tallies: Sequence[EntryTally], assignment_factor: float) -> List[EntryTally]:
    """Return scored copies of ``tallies`` ordered from best to worst."""
    if not tallies:
        return []

    max_count = max(tally.count for tally in tallies)
    all_priorities = [priority for tally in tallies for priority in tally.priorities]
    best, worst = min(all_priorities), max(all_priorities)
    spread = worst - best

    scored = []
    for tally in tallies:
        popularity = tally.count / max_count
        preference = 1.0 if spread == 0 else (worst - tally.mean_priority) / spread
        score = assignment_factor * popularity + (1 - assignment_factor) * preference
        scored.append(replace(tally, priorities=list(tally.priorities), score=score))

    return sorted(scored, key=lambda tally: (-tally.score, tally.order))


def compute_results(
    votes: Mapping[str, Sequence[Vote]],
    submissions: Mapping[str, Sequence[Entry]],
    user_max: int,
    assignment_factor: float,
) -> Dict[str, List[Entry]]:
    """Assign ranked entries to every voter.

    Returns a mapping with one key per voter (possibly with an empty
    list when nothing could be assigned to them).
    """
    ranked = rank_entries(tally_votes(votes), assignment_factor)
    capacity: Dict[Entry, int] = {tally.entry: tally.count for tally in ranked}
    participants = sorted(votes)

    # Per‑participant candidates, each list in global rank order.
    on_ballot: Dict[str, List[Entry]] = {}
    elsewhere: Dict[str, List[Entry]] = {}
    for name in participants:
        ballot: Set[Entry] = {vote.entry for vote in votes[name]}
        own: Set[Entry] = set(submissions.get(name, []))
        eligible = [tally.entry for tally in ranked if tally.entry not in own]
        on_ballot[name] = [entry for entry in eligible if entry in ballot]
        elsewhere[name] = [entry for entry in eligible if entry not in ballot]

    results: Dict[str, List[Entry]] = {name: [] for name in participants}
    for candidates in (on_ballot, elsewhere):
        _assign_rounds(participants, candidates, capacity, results, user_max)
    return results


def _assign_rounds(
    participants: Sequence[str],
    candidates: Mapping[str, Sequence[Entry]],
    capacity: Dict[Entry, int],
    results: Dict[str, List[Entry]],
    user_max: int,
) -> None:
    """Round‑robin one pick per participant until nobody can take more."""
    while True:
        assigned = False
        for name in participants:
            if len(results[name]) >= user_max:
                continue
            for entry in candidates[name]:
                if capacity[entry] > 0 and entry not in results[name]:
                    results[name].append(entry)
                    capacity[entry] -= 1
                    assigned = True
                    break
        if not assigned:
            return
