from __future__ import annotations

import random
import secrets

from app.models.common import utcnow
from app.models.post import POST_STATUSES
from app.models.task import TASK_LABELS, TASK_PRIORITIES, TASK_STATUSES

_ADJECTIVES = ("primary", "virtual", "haptic", "redundant", "optical", "mobile", "wireless", "neural", "digital", "open-source")
_NOUNS = ("bus", "circuit", "firewall", "protocol", "driver", "array", "pixel", "matrix", "card", "bandwidth")
_VERBS = ("index", "parse", "compress", "navigate", "bypass", "synthesize", "override", "reboot", "quantify", "program")
_AUTHORS = ("Alice", "Bruno", "Chen", "Dana", "Emeka", "Farah", "Goran", "Hana", "Ivan", "Jules")
_WORDS = ("lorem", "ipsum", "dolor", "sit", "amet", "tempor", "labore", "magna", "aliqua", "veniam", "nostrud")


def new_task_code() -> str:
    return "TASK-" + "".join(secrets.choice("0123456789") for _ in range(4))


def _hacker_phrase(rng: random.Random) -> str:
    phrase = f"{rng.choice(_VERBS)} the {rng.choice(_ADJECTIVES)} {rng.choice(_NOUNS)}"
    return phrase[:1].upper() + phrase[1:]


def random_task_fields(rng: random.Random | None = None) -> dict:
    rng = rng or random.Random()
    now = utcnow()
    return {
        "code": new_task_code(),
        "title": _hacker_phrase(rng),
        "status": rng.choice(TASK_STATUSES),
        "label": rng.choice(TASK_LABELS),
        "priority": rng.choice(TASK_PRIORITIES),
        "created_at": now,
        "updated_at": now,
    }


def random_post_fields(rng: random.Random | None = None) -> dict:
    rng = rng or random.Random()
    now = utcnow()
    sentence = " ".join(rng.choice(_WORDS) for _ in range(rng.randint(4, 9)))
    return {
        "title": sentence[:1].upper() + sentence[1:] + ".",
        "status": rng.choice(POST_STATUSES),
        "author": rng.choice(_AUTHORS),
        "nb_comments": rng.randint(0, 50),
        "created_at": now,
        "updated_at": now,
    }
