"""Stage‑dependent public view of an exchange."""

from typing import List, Optional

from ..schemas.entry import Entry, Stage
from ..schemas.exchange import Exchange, ExchangeView


def voting_options(exchange: Exchange, requester: Optional[str] = None) -> List[Entry]:
    """Entries open for voting, without the requester's own submissions.

    Entries submitted by several participants are listed once.
    """
    own = exchange.submissions.get(requester, []) if requester else []
    options: List[Entry] = []
    for entries in exchange.submissions.values():
        for entry in entries:
            if entry not in own and entry not in options:
                options.append(entry)
    return options


def project(exchange: Exchange, requester: Optional[str] = None) -> ExchangeView:
    """Build the view of ``exchange`` a participant is allowed to see.

    During submission and selection only the title, id and stage are
    released.  While voting, the entries to vote on are included; once
    frozen, the results are.
    """
    view = ExchangeView(title=exchange.title, id=exchange.id, stage=exchange.stage)
    if exchange.stage == Stage.VOTING:
        view.submissions = voting_options(exchange, requester)
    elif exchange.stage == Stage.FROZEN:
        view.results = {name: list(entries) for name, entries in exchange.results.items()}
    return view
