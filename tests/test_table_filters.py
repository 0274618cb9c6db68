import unittest
from datetime import date

from tests.base import TableDbTestBase

from app.models.task import Task
from app.schemas.table import FilterClause
from app.services.table_filters import (
    NO_CONSTRAINT,
    And,
    Clause,
    NoConstraint,
    Or,
    build_filter,
    compose,
    date_range_filter,
    to_expression,
)


class FilterBuilderTests(unittest.TestCase):
    def test_empty_value_is_no_constraint(self):
        for value in (None, "", "   "):
            predicate = build_filter(Task, FilterClause(column="title", value=value, match_mode="contains"))
            self.assertIsInstance(predicate, NoConstraint)

    def test_enumerated_single_value_is_equality(self):
        predicate = build_filter(Task, FilterClause(column="status", value="done", is_enumerated=True))
        self.assertIsInstance(predicate, Clause)
        self.assertIn("tasks.status =", str(predicate.expression))

    def test_enumerated_multi_value_is_in_list(self):
        predicate = build_filter(Task, FilterClause(column="status", value="todo.done", is_enumerated=True))
        self.assertIsInstance(predicate, Clause)
        self.assertIn("IN", str(predicate.expression))

    def test_enumerated_separators_only_is_still_a_clause(self):
        for value in (".", ".."):
            predicate = build_filter(Task, FilterClause(column="status", value=value, is_enumerated=True))
            self.assertIsInstance(predicate, Clause)

    def test_contains_uses_like(self):
        predicate = build_filter(Task, FilterClause(column="title", value="alpha", match_mode="contains"))
        self.assertIn("LIKE", str(predicate.expression))

    def test_unknown_column_is_programmer_error(self):
        with self.assertRaises(ValueError):
            build_filter(Task, FilterClause(column="nope", value="x"))
        with self.assertRaises(ValueError):
            build_filter(Task, FilterClause(column="__tablename__", value="x"))

    def test_partial_date_range_is_skipped(self):
        self.assertIs(date_range_filter(Task.created_at, date(2026, 3, 1), None), NO_CONSTRAINT)
        self.assertIs(date_range_filter(Task.created_at, None, date(2026, 3, 1)), NO_CONSTRAINT)


class ComposerTests(unittest.TestCase):
    def test_nothing_to_filter_returns_no_constraint(self):
        clauses = [
            FilterClause(column="title", value="", match_mode="contains"),
            FilterClause(column="status", value=None, is_enumerated=True),
        ]
        predicate = compose(Task, clauses, date(2026, 3, 1), None, "or")
        self.assertIs(predicate, NO_CONSTRAINT)
        self.assertIsNone(to_expression(predicate))

    def test_single_clause_is_not_wrapped(self):
        predicate = compose(Task, [FilterClause(column="status", value="done", is_enumerated=True)])
        self.assertIsInstance(predicate, Clause)

    def test_operator_selects_and_or(self):
        clauses = [
            FilterClause(column="status", value="done", is_enumerated=True),
            FilterClause(column="priority", value="high", is_enumerated=True),
        ]
        self.assertIsInstance(compose(Task, clauses, operator="and"), And)
        self.assertIsInstance(compose(Task, clauses, operator=None), And)
        self.assertIsInstance(compose(Task, clauses, operator="or"), Or)

    def test_full_date_range_is_added(self):
        predicate = compose(Task, [], date(2026, 3, 1), date(2026, 3, 2))
        self.assertIsInstance(predicate, Clause)
        self.assertIn("created_at", str(predicate.expression))

    def test_nested_no_constraint_renders_to_none(self):
        self.assertIsNone(to_expression(And((NO_CONSTRAINT, Or((NO_CONSTRAINT,))))))


class FilterExecutionTests(TableDbTestBase):
    def _titles(self, predicate):
        with self.SessionLocal() as db:
            q = db.query(Task)
            where = to_expression(predicate)
            if where is not None:
                q = q.filter(where)
            return sorted(t.title for t in q.all())

    def test_contains_treats_wildcards_literally(self):
        with self.SessionLocal() as db:
            db.add_all(
                [
                    Task(code="TASK-0001", title="100% done"),
                    Task(code="TASK-0002", title="plain title"),
                    Task(code="TASK-0003", title="snake_case"),
                    Task(code="TASK-0004", title="snakeXcase"),
                ]
            )
            db.commit()
        percent = build_filter(Task, FilterClause(column="title", value="%", match_mode="contains"))
        self.assertEqual(self._titles(percent), ["100% done"])
        underscore = build_filter(Task, FilterClause(column="title", value="e_c", match_mode="contains"))
        self.assertEqual(self._titles(underscore), ["snake_case"])

    def test_date_range_includes_whole_end_day(self):
        self._seed_tasks(10)
        predicate = compose(Task, [], date(2026, 3, 3), date(2026, 3, 5))
        self.assertEqual(self._titles(predicate), ["Task 02 alpha", "Task 03 beta", "Task 04 alpha"])

    def test_unknown_enumerated_value_matches_nothing(self):
        self._seed_tasks(8)
        predicate = build_filter(Task, FilterClause(column="status", value="archived", is_enumerated=True))
        self.assertEqual(self._titles(predicate), [])

    def test_separator_only_value_matches_nothing(self):
        self._seed_tasks(8)
        predicate = build_filter(Task, FilterClause(column="status", value="..", is_enumerated=True))
        self.assertEqual(self._titles(predicate), [])


if __name__ == "__main__":
    unittest.main()
