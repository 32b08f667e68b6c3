"""
FilterState Tests

🧪 Filter rules:
Replace-on-duplicate (unlike sorting's toggle), implicit EQ for the
two-argument form, and permissive bulk loading.
"""

from unittest.mock import Mock

import pytest

from querysync import FilterOperator, FilterRule, FilterState


@pytest.fixture
def filters():
    return FilterState()


class TestOperators:

    def test_operator_values(self):
        assert FilterState.EQ == "="
        assert FilterState.NE == "!="
        assert FilterState.LT == "<"
        assert FilterState.LTE == "<="
        assert FilterState.GT == ">"
        assert FilterState.GTE == ">="
        assert FilterState.IN == "in"

    def test_operator_accepts_names(self):
        assert FilterOperator("lte") is FilterOperator.LTE
        assert FilterOperator("<=") is FilterOperator.LTE


class TestWhere:

    def test_two_arguments_imply_eq(self, filters):
        filters.where("name", "Bob")

        assert filters.to_json() == [{"name": "name", "operator": "=", "value": "Bob"}]

    def test_three_arguments_use_the_operator(self, filters):
        filters.where("age", FilterState.GTE, 18)

        assert filters.get_filter("age") == FilterRule("age", FilterOperator.GTE, 18)

    def test_emits_update_once(self, filters):
        listener = Mock()
        filters.subscribe("update", listener)

        filters.where("name", "Bob")

        listener.assert_called_once_with(filters)

    def test_same_name_replaces_previous_rule(self, filters):
        filters.where("age", FilterState.GT, 18)
        filters.where("status", "active")
        filters.where("age", FilterState.LTE, 65)

        assert len(filters) == 2
        assert filters.to_tuples() == [("age", "<=", 65), ("status", "=", "active")]

    def test_none_is_a_valid_value(self, filters):
        filters.where("deleted_at", None)
        assert filters.get_filter("deleted_at").value is None

    def test_unknown_operator_raises(self, filters):
        with pytest.raises(ValueError):
            filters.where("age", "~", 3)


class TestLoad:

    @pytest.mark.parametrize("invalid", [
        None, {}, 0, [None], [{}], [{"name": "age", "operator": "="}],
        [{"name": "", "operator": "=", "value": 1}], [["age", "="]], [["age", "~", 1]], ["age"],
    ])
    def test_silently_refuses_invalid_values(self, filters, invalid):
        filters.load(invalid)
        assert len(filters) == 0

    def test_accepts_mappings_and_triplets(self, filters):
        filters.load([
            {"name": "name", "operator": "=", "value": "Bob"},
            ("age", ">", 30),
            ["tags", "in", ["a", "b"]],
        ])

        assert filters.to_tuples() == [
            ("name", "=", "Bob"),
            ("age", ">", 30),
            ("tags", "in", ["a", "b"]),
        ]

    def test_duplicates_replace(self, filters):
        filters.load([("age", ">", 30), ("age", "<", 10)])

        assert filters.to_tuples() == [("age", "<", 10)]

    def test_does_not_emit(self, filters):
        listener = Mock()
        filters.subscribe("update", listener)

        filters.load([("age", ">", 30)])

        listener.assert_not_called()

    def test_create(self):
        state = FilterState.create([("age", ">", 30)])
        assert state.has_filter("age")


class TestMutatorsAndQueries:

    def test_remove_and_reset_do_not_emit(self, filters):
        filters.where("a", 1)
        filters.where("b", 2)
        listener = Mock()
        filters.subscribe("update", listener)

        filters.remove("a")
        assert filters.get_filter("a") is None
        assert filters.has_filter("b")

        filters.reset()
        assert len(filters) == 0
        listener.assert_not_called()

    def test_to_json_returns_copies(self, filters):
        filters.where("name", "Bob")

        json = filters.to_json()
        json[0]["value"] = "Alice"

        assert filters.get_filter("name").value == "Bob"
