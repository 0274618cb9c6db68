import os
import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from app.models.post import Post
from app.models.task import TASK_PRIORITIES, TASK_STATUSES, Task
from app.models.view import View

BASE_TIME = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


class TableDbTestBase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        Task.__table__.create(bind=cls.engine)
        Post.__table__.create(bind=cls.engine)
        View.__table__.create(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        View.__table__.drop(bind=cls.engine)
        Post.__table__.drop(bind=cls.engine)
        Task.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            db.execute(delete(View))
            db.execute(delete(Post))
            db.execute(delete(Task))
            db.commit()

    def _seed_tasks(self, count: int = 25) -> None:
        """Task ``i`` is created on day ``i`` of March 2026 at noon.

        Statuses cycle through todo/in-progress/done/canceled and priorities
        through low/medium/high, so ``i % 4 == 2`` is done and ``i % 3 == 2``
        is high. Even rows carry "alpha" in the title, odd rows "beta".
        """
        with self.SessionLocal() as db:
            for i in range(count):
                created = BASE_TIME + timedelta(days=i)
                db.add(
                    Task(
                        code=f"TASK-{i:04d}",
                        title=f"Task {i:02d} {'alpha' if i % 2 == 0 else 'beta'}",
                        status=TASK_STATUSES[i % 4],
                        label="bug",
                        priority=TASK_PRIORITIES[i % 3],
                        created_at=created,
                        updated_at=created,
                    )
                )
            db.commit()

    def _seed_posts(self, count: int = 12) -> None:
        with self.SessionLocal() as db:
            for i in range(count):
                created = BASE_TIME + timedelta(days=i)
                db.add(
                    Post(
                        title=f"Post {i:02d}",
                        status=TASK_STATUSES[i % 4],
                        author="Alice" if i % 2 == 0 else "Bruno",
                        nb_comments=i,
                        created_at=created,
                        updated_at=created,
                    )
                )
            db.commit()
