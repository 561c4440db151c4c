"""Token-weighted episode voting."""

from bushido.governance.ballot import (
    AlreadyVoted,
    BallotError,
    Episode,
    EpisodeBallot,
    EpisodeClosed,
    EpisodeExists,
    EpisodeNotFound,
    NotTokenOwner,
    UnknownOption,
)

__all__ = [
    "EpisodeBallot",
    "Episode",
    "BallotError",
    "AlreadyVoted",
    "EpisodeClosed",
    "EpisodeExists",
    "EpisodeNotFound",
    "NotTokenOwner",
    "UnknownOption",
]
