from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any, Mapping

_TRUE_STRINGS = {"true", "1", "yes", "y", "on"}


class ActorDataError(RuntimeError):
    pass


@dataclass
class Actor:
    """
    A cast member of a media item.

    `order` 0 means "unset": the roster assigns the next slot on insertion.
    `image` holds the raw thumbnail bytes (empty when nothing is cached).
    """

    name: str = ""
    role: str = ""
    thumb: str = ""
    id: str = ""
    order: int = 0
    image: bytes = b""
    preserve_image: bool = False
    image_has_changed: bool = False

    def __str__(self) -> str:
        return describe_actor(self)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "role": self.role,
            "thumb": self.thumb,
            "id": self.id,
            "order": self.order,
            "image": base64.b64encode(self.image).decode("ascii") if self.image else "",
            "preserve_image": self.preserve_image,
            "image_has_changed": self.image_has_changed,
        }


def describe_actor(actor: Actor) -> str:
    lines = [
        "Actor",
        f"  Name:  {actor.name}",
        f"  Role:  {actor.role}",
        f"  Thumb: {actor.thumb}",
        f"  ID:    {actor.id}",
        f"  Order: {actor.order}",
    ]
    return "\n".join(lines) + "\n"


def _coerce_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coerce_order(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.isdigit():
            return int(stripped)
    return 0


def _coerce_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    if isinstance(value, str):
        return value.strip().casefold() in _TRUE_STRINGS
    return False


def _coerce_image(value: Any) -> bytes:
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return b""
        try:
            return base64.b64decode(stripped, validate=True)
        except (binascii.Error, ValueError) as exc:
            raise ActorDataError(f"Actor image is not valid base64: {stripped[:40]!r}") from exc
    raise ActorDataError(f"Unsupported actor image type: {type(value).__name__}")


def _first_present(row: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


def actor_from_mapping(row: Mapping[str, Any]) -> Actor:
    """
    Build an `Actor` from a loosely-typed row (JSON, CSV, scraper output).

    Accepts both snake_case keys and the camelCase aliases used by older exports
    (`thumbnail`, `preserveImage`, `imageHasChanged`).
    """
    if not isinstance(row, Mapping):
        raise ActorDataError(f"Actor row must be a mapping, got {type(row).__name__}")

    return Actor(
        name=_coerce_str(row.get("name")),
        role=_coerce_str(row.get("role")),
        thumb=_coerce_str(_first_present(row, "thumb", "thumbnail")),
        id=_coerce_str(row.get("id")),
        order=_coerce_order(row.get("order")),
        image=_coerce_image(row.get("image")),
        preserve_image=_coerce_bool(_first_present(row, "preserve_image", "preserveImage")),
        image_has_changed=_coerce_bool(_first_present(row, "image_has_changed", "imageHasChanged")),
    )
