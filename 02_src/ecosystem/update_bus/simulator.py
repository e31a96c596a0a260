"""Simulated update source used while no live feed is wired in."""

import random
import string
from datetime import datetime, timezone

from ..models import UpdateAction, UpdateEvent, UpdateKind

_ID_ALPHABET = string.ascii_lowercase + string.digits


def _random_id(rng: random.Random) -> str:
    return "".join(rng.choice(_ID_ALPHABET) for _ in range(9))


def random_update(rng: random.Random | None = None) -> UpdateEvent:
    """Build one random ``update`` event for an asset, task or metric."""
    rng = rng or random.Random()
    kind = rng.choice(list(UpdateKind))
    now = datetime.now(timezone.utc)

    if kind is UpdateKind.ASSET:
        payload = {
            "id": _random_id(rng),
            "status": "warning" if rng.random() > 0.7 else "active",
            "last_updated": now.isoformat(),
        }
    elif kind is UpdateKind.TASK:
        payload = {
            "id": _random_id(rng),
            "completed": rng.random() > 0.8,
            "priority": "high" if rng.random() > 0.5 else "medium",
        }
    else:
        payload = {
            "metric_kind": "data_quality",
            "value": rng.randrange(80, 100),
        }

    return UpdateEvent(
        kind=kind,
        action=UpdateAction.UPDATE,
        payload=payload,
        occurred_at=now,
    )
