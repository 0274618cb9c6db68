from __future__ import annotations

import argparse
import logging
import random
from time import perf_counter

from app.core.config import settings
from app.data.sample_rows import random_post_fields, random_task_fields
from app.db.session import SessionLocal
from app.models.post import Post
from app.models.task import Task

_LOG = logging.getLogger("app.seed")


_TASK_CODE_SPACE = 10_000


def seed_tasks(db, count: int, rng: random.Random) -> int:
    if count > _TASK_CODE_SPACE:
        raise ValueError(f"at most {_TASK_CODE_SPACE} tasks fit the TASK-NNNN code space")
    db.query(Task).delete(synchronize_session=False)
    used_codes: set[str] = set()
    rows = []
    while len(rows) < count:
        fields = random_task_fields(rng)
        if fields["code"] in used_codes:
            continue
        used_codes.add(fields["code"])
        rows.append(Task(**fields))
    db.add_all(rows)
    return len(rows)


def seed_posts(db, count: int, rng: random.Random) -> int:
    db.query(Post).delete(synchronize_session=False)
    rows = [Post(**random_post_fields(rng)) for _ in range(count)]
    db.add_all(rows)
    return len(rows)


def run_seed(count: int, seed: int | None = None) -> dict[str, int]:
    rng = random.Random(seed)
    started_at = perf_counter()
    with SessionLocal() as db:
        result = {"tasks": seed_tasks(db, count, rng), "posts": seed_posts(db, count, rng)}
        db.commit()
    _LOG.info("seed completed tasks=%s posts=%s duration_ms=%.0f", result["tasks"], result["posts"], (perf_counter() - started_at) * 1000.0)
    return result


def main() -> None:
    parser = argparse.ArgumentParser(description="Replace tasks and posts with random sample rows")
    parser.add_argument("--count", type=int, default=settings.SEED_ROW_COUNT)
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    args = parser.parse_args()
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    run_seed(max(args.count, 0), args.seed)


if __name__ == "__main__":
    main()
