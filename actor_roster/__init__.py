"""
Actor roster library code.

This package holds the cast-member model and the merge rules used when new actor
data arrives from an external metadata source:
- `actor_roster.models` for the `Actor` record and its (de)serialization
- `actor_roster.ingestion` for the `ActorRoster` merge logic
- `actor_roster.media` for thumbnail downloads

CLI entrypoints live in `scripts/` and import from `actor_roster` rather than the
other way around.
"""
