from __future__ import annotations

import logging

import requests

from actor_roster.ingestion.roster import ActorRoster
from actor_roster.utils.env import env_float, env_str

logger = logging.getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0
_DEFAULT_HEADERS = {
    "accept": "image/avif,image/webp,image/apng,image/*,*/*;q=0.8",
    "accept-language": "en-US,en;q=0.9",
    "user-agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
}


class ActorImageError(RuntimeError):
    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def _request_headers() -> dict[str, str]:
    headers = dict(_DEFAULT_HEADERS)
    user_agent = env_str("ACTOR_IMAGE_USER_AGENT")
    if user_agent:
        headers["user-agent"] = user_agent
    return headers


def download_actor_image(
    url: str,
    *,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> bytes:
    url = (url or "").strip()
    if not url.startswith(("http://", "https://")):
        raise ActorImageError(f"Unsupported thumbnail URL: {url!r}", url=url)

    timeout_seconds = timeout if timeout is not None else env_float(
        "ACTOR_IMAGE_TIMEOUT_SECONDS", _DEFAULT_TIMEOUT_SECONDS
    )
    client = session or requests.Session()
    try:
        resp = client.get(url, headers=_request_headers(), timeout=timeout_seconds)
    except requests.RequestException as exc:
        raise ActorImageError(f"Thumbnail request failed: {exc}", url=url) from exc

    if resp.status_code != 200:
        raise ActorImageError(
            f"Thumbnail request failed with HTTP {resp.status_code}.",
            url=url,
            status_code=resp.status_code,
        )

    data = resp.content or b""
    if not data:
        raise ActorImageError("Empty image response", url=url, status_code=resp.status_code)
    return data


def load_actor_images(
    roster: ActorRoster,
    *,
    session: requests.Session | None = None,
    overwrite: bool = False,
) -> int:
    """
    Download each actor's thumbnail into its `image` blob.

    Curated images (`preserve_image` with an image already present) are never
    touched. Actors that already carry an image are skipped unless `overwrite`.
    Returns the number of images stored.
    """
    client = session or requests.Session()
    stored = 0
    for actor in roster:
        if not actor.thumb:
            continue
        if actor.preserve_image and actor.image:
            continue
        if actor.image and not overwrite:
            continue
        try:
            data = download_actor_image(actor.thumb, session=client)
        except ActorImageError as exc:
            logger.warning(f"Skipping image for actor {actor.name!r}: {exc}")
            continue
        actor.image = data
        actor.image_has_changed = True
        stored += 1
    return stored
