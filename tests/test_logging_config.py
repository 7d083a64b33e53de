from __future__ import annotations

import logging

from venuebook.core.logging_config import ContextFormatter


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("venuebook.test", logging.INFO, __file__, 1, "Availability refreshed", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_formats_reservation_and_occupancy_extras():
    formatter = ContextFormatter("%(levelname)s:%(name)s:%(message)s")
    line = formatter.format(_record(venue_id="venue-1", reservation_id="res-1", occupied_days=4))

    assert line.startswith("INFO:venuebook.test:Availability refreshed | ")
    assert "venue_id=venue-1" in line
    assert "reservation_id=res-1" in line
    assert "occupied_days=4" in line


def test_zero_count_is_still_rendered():
    formatter = ContextFormatter("%(message)s")
    assert formatter.format(_record(occupied_days=0)) == "Availability refreshed | occupied_days=0"


def test_no_extras_leaves_message_untouched():
    formatter = ContextFormatter("%(message)s")
    assert formatter.format(_record()) == "Availability refreshed"
