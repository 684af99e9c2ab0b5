"""
Tests for the pagination engine and describe context.
"""

import time

import pytest

from aws_describer.core.context import DescribeContext
from aws_describer.core.exceptions import (
    DescribeCancelledError,
    DescribeTimeoutError,
    PaginationLimitError,
)
from aws_describer.core.pagination import paginate_retrieve_all


def scripted_step(cursors):
    """Step returning ``cursors`` in order and recording what it was given."""
    received = []
    remaining = list(cursors)

    def step(cursor):
        received.append(cursor)
        return remaining.pop(0)

    return step, received


class TestPaginateRetrieveAll:
    """Tests for paginate_retrieve_all."""

    def test_follows_cursors_until_absent(self):
        step, received = scripted_step(["A", "B", None])

        pages = paginate_retrieve_all(step)

        assert received == [None, "A", "B"]
        assert pages == 3

    def test_single_page(self):
        step, received = scripted_step([None])
        assert paginate_retrieve_all(step) == 1
        assert received == [None]

    def test_empty_string_cursor_stops(self):
        step, received = scripted_step(["A", ""])
        assert paginate_retrieve_all(step) == 2
        assert received == [None, "A"]

    def test_step_errors_propagate(self):
        def step(cursor):
            if cursor == "A":
                raise RuntimeError("page two failed")
            return "A"

        with pytest.raises(RuntimeError, match="page two failed"):
            paginate_retrieve_all(step)

    def test_page_ceiling(self):
        step, received = scripted_step(["A", "B", "C", None])

        with pytest.raises(PaginationLimitError) as exc_info:
            paginate_retrieve_all(step, max_pages=2, resource_type="Test::Thing")

        assert received == [None, "A"]
        assert exc_info.value.details["max_pages"] == 2
        assert exc_info.value.resource_type == "Test::Thing"

    def test_ceiling_not_hit_when_traversal_ends(self):
        step, _ = scripted_step(["A", None])
        assert paginate_retrieve_all(step, max_pages=2) == 2

    def test_cancelled_before_first_page(self):
        ctx = DescribeContext(region="us-east-1")
        ctx.cancel()
        step, received = scripted_step([None])

        with pytest.raises(DescribeCancelledError):
            paginate_retrieve_all(step, ctx)
        assert received == []

    def test_cancelled_between_pages(self):
        ctx = DescribeContext(region="us-east-1")
        received = []

        def step(cursor):
            received.append(cursor)
            ctx.cancel()
            return "A"

        with pytest.raises(DescribeCancelledError):
            paginate_retrieve_all(step, ctx)
        assert received == [None]


class TestDescribeContext:
    """Tests for DescribeContext."""

    def test_defaults(self):
        ctx = DescribeContext(region="eu-west-1")
        assert ctx.account_id == ""
        assert ctx.deadline is None
        assert not ctx.cancelled
        assert not ctx.expired
        ctx.check()

    def test_deadline_expires(self):
        ctx = DescribeContext(region="eu-west-1", timeout=0)
        time.sleep(0.01)

        assert ctx.expired
        with pytest.raises(DescribeTimeoutError):
            ctx.check("AWS::SQS::Queue")

    def test_for_region_shares_cancellation(self):
        parent = DescribeContext(region="", account_id="123456789012", timeout=60)
        child = parent.for_region("ap-south-1")

        assert child.region == "ap-south-1"
        assert child.account_id == "123456789012"
        assert child.deadline == parent.deadline

        parent.cancel()
        assert child.cancelled
