from datetime import datetime


def now_rounded() -> datetime:
    """
    Current local time, timezone-aware, with the sub-second part dropped.
    """
    return datetime.now().astimezone().replace(microsecond=0)


def as_local(datetime_obj: datetime) -> datetime:
    """
    Timezone-aware version of a datetime. Naive datetimes are taken to be local time.
    """
    return datetime_obj if datetime_obj.tzinfo else datetime_obj.astimezone()


def iso_format(datetime_obj: datetime) -> str:
    """
    Format a datetime as an ISO 8601 timestamp with seconds precision, keeping its offset.

    Example: 2019-10-09T13:00:00+02:00
    """
    return datetime_obj.isoformat(timespec="seconds")


## Tests


def test_now_rounded():
    now = now_rounded()
    assert now.microsecond == 0
    assert now.tzinfo is not None


def test_iso_format():
    from datetime import timedelta, timezone

    ts = datetime(2019, 10, 9, 13, 0, 0, 123456, tzinfo=timezone(timedelta(hours=2)))
    assert iso_format(ts) == "2019-10-09T13:00:00+02:00"


def test_as_local():
    naive = datetime(2019, 10, 9, 13, 0, 0)
    assert as_local(naive).tzinfo is not None
    assert as_local(naive).replace(tzinfo=None) == naive
