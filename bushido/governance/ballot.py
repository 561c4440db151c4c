"""Episode ballots weighted by token voting power.

Each episode offers a fixed set of options.  Every minted token may vote once
per episode, and its vote counts with the token's voting power, so a
Legendary warrior outweighs twenty-five Commons by exactly one.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from pydantic import BaseModel, Field

from bushido.minting.counter import normalize_wallet
from bushido.minting.registry import TokenRegistry


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class BallotError(Exception):
    """Base class for rejected ballot operations."""


class EpisodeNotFound(BallotError):
    def __init__(self, episode_id: int) -> None:
        self.episode_id = episode_id
        super().__init__(f"Episode {episode_id} does not exist")


class EpisodeExists(BallotError):
    def __init__(self, episode_id: int) -> None:
        self.episode_id = episode_id
        super().__init__(f"Episode {episode_id} already exists")


class EpisodeClosed(BallotError):
    def __init__(self, episode_id: int) -> None:
        self.episode_id = episode_id
        super().__init__(f"Voting for episode {episode_id} is closed")


class UnknownOption(BallotError):
    def __init__(self, episode_id: int, option: str) -> None:
        self.episode_id = episode_id
        self.option = option
        super().__init__(f"Episode {episode_id} has no option {option!r}")


class AlreadyVoted(BallotError):
    def __init__(self, episode_id: int, token_id: int) -> None:
        self.episode_id = episode_id
        self.token_id = token_id
        super().__init__(f"Token #{token_id} already voted in episode {episode_id}")


class NotTokenOwner(BallotError):
    def __init__(self, wallet: str, token_id: int) -> None:
        self.wallet = wallet
        self.token_id = token_id
        super().__init__(f"Wallet {wallet} does not own token #{token_id}")


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------

class Episode(BaseModel):
    """A single vote with its options and running tallies."""
    episode_id: int = Field(..., ge=1)
    options: list[str] = Field(..., min_length=1)
    open: bool = Field(default=True)
    tallies: dict[str, int] = Field(default_factory=dict)
    voted_tokens: set[int] = Field(default_factory=set)


# ---------------------------------------------------------------------------
# Ballot
# ---------------------------------------------------------------------------

class EpisodeBallot:
    """Records token-weighted votes against a ``TokenRegistry``."""

    def __init__(self, registry: TokenRegistry) -> None:
        self.registry = registry
        self._episodes: dict[int, Episode] = {}
        self._lock = threading.Lock()

    def create_episode(self, episode_id: int, options: Iterable[str]) -> Episode:
        """Open a new episode.

        Raises:
            EpisodeExists: If *episode_id* was already created.
            ValueError: If no options, or duplicate options, are given.
        """
        option_list = list(options)
        if not option_list:
            raise ValueError(f"Episode {episode_id} needs at least one option")
        if len(set(option_list)) != len(option_list):
            raise ValueError(f"Duplicate options for episode {episode_id}: {option_list}")
        with self._lock:
            if episode_id in self._episodes:
                raise EpisodeExists(episode_id)
            episode = Episode(
                episode_id=episode_id,
                options=option_list,
                tallies={opt: 0 for opt in option_list},
            )
            self._episodes[episode_id] = episode
            return episode

    def close_episode(self, episode_id: int) -> None:
        with self._lock:
            self._get(episode_id).open = False

    def cast_vote(self, episode_id: int, wallet: str, token_id: int, option: str) -> int:
        """Vote with *token_id* for *option*.

        Returns:
            The weight added to *option*.

        Raises:
            EpisodeNotFound, EpisodeClosed, UnknownOption, NotTokenOwner,
            AlreadyVoted, plus ``InvalidTokenId`` / ``TokenNotFound`` from the
            registry.
        """
        owner = self.registry.owner_of(token_id)
        weight = self.registry.voting_power_of(token_id)
        if owner != normalize_wallet(wallet):
            raise NotTokenOwner(wallet, token_id)

        with self._lock:
            episode = self._get(episode_id)
            if not episode.open:
                raise EpisodeClosed(episode_id)
            if option not in episode.tallies:
                raise UnknownOption(episode_id, option)
            if token_id in episode.voted_tokens:
                raise AlreadyVoted(episode_id, token_id)
            episode.voted_tokens.add(token_id)
            episode.tallies[option] += weight
        return weight

    def results(self, episode_id: int) -> dict[str, int]:
        """Weighted tallies per option, in option order."""
        with self._lock:
            return dict(self._get(episode_id).tallies)

    def winner(self, episode_id: int) -> str | None:
        """Leading option, or ``None`` while no votes are in or the top is tied."""
        tallies = self.results(episode_id)
        top = max(tallies.values())
        leaders = [opt for opt, votes in tallies.items() if votes == top]
        if top == 0 or len(leaders) > 1:
            return None
        return leaders[0]

    def _get(self, episode_id: int) -> Episode:
        episode = self._episodes.get(episode_id)
        if episode is None:
            raise EpisodeNotFound(episode_id)
        return episode
