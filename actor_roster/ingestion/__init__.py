"""
Ingestion helpers for merging fetched cast data into a roster.
"""

from actor_roster.ingestion.roster import ActorRoster, merge_actor

__all__ = [
    "ActorRoster",
    "merge_actor",
]
