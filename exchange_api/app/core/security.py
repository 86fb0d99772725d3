"""
Secret generation and verification for exchanges.

Each exchange is protected by a single shared secret, handed out once
when the exchange is created.  Secrets are meant to be easy to read
aloud and type, not to resist guessing: they combine two pony names
and a phrase, e.g. ``RarityBoopsDerpy``.  Treat them as a low‑security
shared token.

Administrative endpoints receive the secret as a bearer token
(``Authorization: Bearer <secret>``) through the ``get_secret``
dependency; services compare it with ``verify_secret``.
"""

import hmac
import random
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer


PONIES = (
    "TwilightSparkle",
    "Rarity",
    "PinkiePie",
    "Fluttershy",
    "RainbowDash",
    "Applejack",
    "MayorMare",
    "DoctorWhooves",
    "Derpy",
    "Coloratura",
    "DaringDo",
    "PhotoFinish",
    "FancyPants",
    "SapphireShores",
    "Spitfire",
    "Soarin",
    "SunnyStarscout",
    "IzzyMoonbow",
    "QueenChrysalis",
    "SilkRose",
)

ACTIONS = (
    "Boops",
    "Kisses",
    "Likes",
    "Loves",
    "WantsToDate",
    "Hugs",
    "Holds",
    "TalksTo",
    "SingsTo",
    "AsksOut",
    "GivesABitTo",
    "HasCoffeeWith",
    "HasAVerySpecificQuestionFor",
    "IsNotTheSamePonyAs",
    "HasACrushOn",
    "IsMarrying",
    "TripsInFrontOf",
    "LooksAt",
    "HoldsHoovesWith",
)

SAME_PONY = "IsTheSamePonyAs"


def generate_secret(rng: Optional[random.Random] = None) -> str:
    """Return a new human‑readable secret.

    Parameters
    ----------
    rng : Optional[random.Random]
        Random source; the module level generator is used when omitted.
        Tests pass a seeded ``random.Random`` for reproducible output.
    """
    rng = rng or random
    first = rng.choice(PONIES)
    second = rng.choice(PONIES)
    if first == second:
        return f"{first}{SAME_PONY}{second}"
    return f"{first}{rng.choice(ACTIONS)}{second}"


def verify_secret(expected: str, provided: Optional[str]) -> bool:
    """Compare secrets in constant time; a missing secret never matches."""
    if not provided:
        return False
    return hmac.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))


security = HTTPBearer(auto_error=False)


def get_secret(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[str]:
    """Dependency that extracts the exchange secret from the request.

    Returns ``None`` when no bearer token is present.  The services
    look the exchange up before checking the secret, so an unknown id
    is reported as not found even without credentials.
    """
    if credentials is None or not credentials.credentials:
        return None
    return credentials.credentials
