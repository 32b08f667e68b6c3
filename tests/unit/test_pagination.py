"""
PaginationState Tests
"""

from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from querysync import InvalidArgumentError, PageMeta, PaginationState


class TestPaginationState:

    def test_defaults(self):
        pagination = PaginationState()

        assert pagination.to_json() == {"currentPage": 1, "itemsPerPage": 10, "count": 0}
        assert pagination.window() == {"currentPage": 1, "itemsPerPage": 10}
        assert pagination.page_count == 0

    @pytest.mark.parametrize("value", [0, -1, 1.5, "2", True, None])
    def test_rejects_invalid_page(self, value):
        with pytest.raises(InvalidArgumentError):
            PaginationState().set_page(value)

    def test_client_changes_emit_update(self):
        pagination = PaginationState()
        listener = Mock()
        pagination.subscribe("update", listener)

        pagination.set_page(3)
        pagination.set_items_per_page(25)
        pagination.next_page()
        pagination.previous_page()

        assert listener.call_count == 4
        assert pagination.window() == {"currentPage": 3, "itemsPerPage": 25}

    def test_unchanged_values_do_not_emit(self):
        pagination = PaginationState()
        listener = Mock()
        pagination.subscribe("update", listener)

        pagination.set_page(1)
        pagination.previous_page()

        listener.assert_not_called()

    def test_set_state_applies_server_values_silently(self):
        pagination = PaginationState()
        listener = Mock()
        pagination.subscribe("update", listener)

        pagination.set_state({"count": 95, "itemsPerPage": 20, "currentPage": 2})

        listener.assert_not_called()
        assert pagination.to_json() == {"currentPage": 2, "itemsPerPage": 20, "count": 95}
        assert pagination.page_count == 5

    def test_set_state_keeps_window_when_meta_omits_it(self):
        pagination = PaginationState(current_page=4, items_per_page=5)

        pagination.set_state(PageMeta(count=12))

        assert pagination.to_json() == {"currentPage": 4, "itemsPerPage": 5, "count": 12}

    def test_set_state_rejects_negative_count(self):
        with pytest.raises(ValidationError):
            PaginationState().set_state({"count": -1})

    def test_reset(self):
        pagination = PaginationState(current_page=3, items_per_page=5, count=40)

        pagination.reset()

        assert pagination.to_json() == {"currentPage": 1, "itemsPerPage": 5, "count": 0}
