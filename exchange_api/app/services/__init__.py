"""
Service layer.

``reconciliation``, ``stage_machine``, ``tally`` and ``projection`` are
pure functions over exchange values.  The command services
(``ExchangeService``, ``SubmissionService``, ``VoteService``) wrap them
with store transactions, secret and stage checks, so API handlers stay
free of business rules.
"""
