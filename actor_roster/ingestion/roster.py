from __future__ import annotations

import dataclasses
import logging
from typing import Iterable, Iterator, Sequence

from actor_roster.models.actors import Actor

logger = logging.getLogger(__name__)


def _same_name(left: str, right: str) -> bool:
    return (left or "").casefold() == (right or "").casefold()


def merge_actor(existing: Actor, incoming: Actor) -> None:
    """
    Reconcile `incoming` into `existing` in place.

    Text fields always follow the incoming record. `order` is only taken when set.
    `preserve_image` is sticky: once an actor is marked, no later merge clears it,
    and a marked actor's image is never replaced by fetched artwork.
    """
    existing.name = incoming.name
    existing.role = incoming.role
    existing.thumb = incoming.thumb
    if incoming.order != 0:
        existing.order = incoming.order
    existing.preserve_image = existing.preserve_image or incoming.preserve_image

    if incoming.image and not existing.preserve_image:
        existing.image = incoming.image
        existing.image_has_changed = True


def _match_index(candidates: Sequence[Actor], incoming: Actor, used: Sequence[bool] | None = None) -> int | None:
    # Identifier pass first, then case-insensitive name pass.
    if incoming.id:
        for idx, actor in enumerate(candidates):
            if used is not None and used[idx]:
                continue
            if actor.id == incoming.id:
                return idx

    for idx, actor in enumerate(candidates):
        if used is not None and used[idx]:
            continue
        if _same_name(actor.name, incoming.name):
            return idx
    return None


class ActorRoster:
    """
    Ordered cast list for one media item.

    The roster owns its records: incoming actors are copied on insertion, so callers
    can keep reusing the objects they pass in.
    """

    def __init__(self, actors: Iterable[Actor] | None = None) -> None:
        self._actors: list[Actor] = []
        if actors is not None:
            self.set_actors(actors)

    def __len__(self) -> int:
        return len(self._actors)

    def __iter__(self) -> Iterator[Actor]:
        return iter(self._actors)

    def __bool__(self) -> bool:
        return self.has_actors()

    def __repr__(self) -> str:
        return f"ActorRoster({[actor.name for actor in self._actors]!r})"

    def find_actor(self, *, actor_id: str | None = None, name: str | None = None) -> Actor | None:
        if actor_id:
            for actor in self._actors:
                if actor.id == actor_id:
                    return actor
        if name is not None:
            for actor in self._actors:
                if _same_name(actor.name, name):
                    return actor
        return None

    def add_actor(self, actor: Actor) -> None:
        incoming = dataclasses.replace(actor)
        if incoming.order == 0 and self._actors:
            incoming.order = self._actors[-1].order + 1

        idx = _match_index(self._actors, incoming)
        if idx is not None:
            logger.debug(f"Merging actor {incoming.name!r} into existing record at position {idx}")
            merge_actor(self._actors[idx], incoming)
            return

        logger.debug(f"Adding actor {incoming.name!r} with order {incoming.order}")
        self._actors.append(incoming)

    def set_actors(self, actors: Iterable[Actor]) -> None:
        """
        Replace the roster with `actors`, carrying over matched records.

        Each existing record can absorb at most one incoming actor. Records that
        nothing matched are dropped; the result follows the incoming order.
        """
        used = [False] * len(self._actors)
        updated: list[Actor] = []

        for actor in actors:
            idx = _match_index(self._actors, actor, used)
            if idx is None:
                updated.append(dataclasses.replace(actor))
                continue
            existing = self._actors[idx]
            merge_actor(existing, actor)
            used[idx] = True
            updated.append(existing)

        dropped = used.count(False)
        if dropped:
            logger.debug(f"Dropping {dropped} actor(s) missing from the incoming list")
        self._actors = updated

    def remove_actor(self, actor: Actor) -> None:
        for idx, existing in enumerate(self._actors):
            if existing is actor:
                del self._actors[idx]
                logger.debug(f"Removed actor {actor.name!r}")
                return

    def remove_all(self) -> None:
        self._actors.clear()

    def clear_images(self) -> None:
        for actor in self._actors:
            if not actor.preserve_image:
                actor.image = b""

    def has_actors(self) -> bool:
        return bool(self._actors)

    def actors(self) -> list[Actor]:
        return self._actors

    def actors_view(self) -> tuple[Actor, ...]:
        return tuple(self._actors)
