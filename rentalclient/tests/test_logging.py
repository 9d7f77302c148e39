from __future__ import annotations

import pytest

from rentalclient.shared.logging import correlation_scope, get_correlation_id, logger
from rentalclient.shared.logging.sensitive_filter import sanitize_record


@pytest.fixture()
def captured():
    records: list[dict] = []
    sink_id = logger.add(
        lambda message: records.append(message.record),
        level="DEBUG",
        filter=sanitize_record,
    )
    yield records
    logger.remove(sink_id)


def test_correlation_scope_tags_records_and_restores_previous(captured) -> None:
    assert get_correlation_id() == "-"

    with correlation_scope("req-1"):
        logger.info("inside")
        with correlation_scope("req-2"):
            logger.info("nested")
        assert get_correlation_id() == "req-1"

    logger.info("outside")

    assert [r["extra"]["correlation_id"] for r in captured] == ["req-1", "req-2", "-"]
    assert get_correlation_id() == "-"


def test_sink_receives_redacted_message(captured) -> None:
    logger.info("Authorization: Bearer abcdefghijklmnop")

    assert "abcdefghijklmnop" not in captured[-1]["message"]
