"""
Domain models shared across scripts and services.
"""

from actor_roster.models.actors import Actor, ActorDataError, actor_from_mapping, describe_actor

__all__ = [
    "Actor",
    "ActorDataError",
    "actor_from_mapping",
    "describe_actor",
]
