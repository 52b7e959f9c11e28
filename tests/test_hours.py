import pytest

from laundry_enrich import hours


@pytest.mark.parametrize(
    "text,expected",
    [
        ("10 PM", 22),
        ("9:30pm", 21),
        ("12 pm", 12),
        ("11 AM", 11),
        ("8am-10pm", 22),
        ("closed", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_closing_hour(text, expected):
    assert hours.parse_closing_hour(text) == expected


def test_open_24_hours_markers():
    assert hours.is_open_24_hours("Mon-Sun: 24 hours")
    assert hours.is_open_24_hours("Open 24/7")
    assert hours.is_open_24_hours("OPEN 24 HRS")
    assert not hours.is_open_24_hours("Mon-Fri: 7am-9pm")


def test_open_late_checks_each_segment():
    assert hours.is_open_late("Mon-Fri: 7am-8pm; Sat: 8 AM – 10 PM")
    assert not hours.is_open_late("Mon-Fri: 7am-8pm; Sat: 8am-6pm")


def test_open_late_skips_unparsable_segments():
    text = "Mon: closed; Tue: ask staff; Wed: 6am - 11pm"
    assert hours.is_open_late(text)


def test_open_late_handles_to_ranges():
    assert hours.is_open_late("Daily 7 am to 9 pm")
    assert not hours.is_open_late("Daily 7 am to 8:59 pm")


def test_classify_hours_prefers_24_hour():
    assert hours.classify_hours("Open 24 hours; Sat: 8am-11pm") == ["24-hour"]
    assert hours.classify_hours("Mon-Sun: 6am-11pm") == ["open late"]
    assert hours.classify_hours("Mon-Sun: 6am-6pm") == []
    assert hours.classify_hours(None) == []


def test_open_late_splits_comma_separated_days():
    assert hours.is_open_late("Mon-Fri: 7am-10pm, Sat-Sun: 8am-6pm")
    assert hours.is_open_late("Monday: 7 AM to 10 PM, Tuesday: 7 AM to 6 PM")
    assert hours.classify_hours("Mon-Fri: 7am-10pm, Sat-Sun: 8am-6pm") == ["open late"]
    assert not hours.is_open_late("Mon-Fri: 9:30 am - 6:30 pm, Sat: 9am-5pm")
