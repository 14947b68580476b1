from __future__ import annotations

from conftest import make_payload


def test_empty_store(stats_service):
    stats = stats_service.compute()

    assert stats.total_registrations == 0
    assert stats.total_attendees == 0
    assert stats.checked_in_attendees == 0


def test_stats_identities(service, stats_service):
    a = service.create(make_payload(adultsCount=2, childrenCount=1))
    b = service.create(make_payload(email="b@gmail.com", mobileNumber="502222222", adultsCount=4, childrenCount=3))
    service.create(make_payload(email="c@gmail.com", mobileNumber="503333333", adultsCount=1, childrenCount=0))

    service.check_in(a.registration_id, checked_in_adults=2, checked_in_children=0)
    service.check_in(b.registration_id, checked_in_adults=3, checked_in_children=3)

    stats = stats_service.compute()

    assert stats.total_registrations == 3
    assert (stats.total_adults, stats.total_children) == (7, 4)
    assert stats.total_attendees == stats.total_adults + stats.total_children == 11
    assert stats.checked_in_registrations == 2
    # Checked-in sums count the people actually admitted, not the registered party size.
    assert (stats.checked_in_adults, stats.checked_in_children) == (5, 3)
    assert stats.checked_in_attendees == 8
    assert stats.checked_in_registrations <= stats.total_registrations


def test_check_out_drops_out_of_stats(service, stats_service):
    r = service.create(make_payload())
    service.set_check_in(r.registration_id, is_checked_in=True)
    service.set_check_in(r.registration_id, is_checked_in=False)

    stats = stats_service.compute()
    assert stats.checked_in_registrations == 0
    assert stats.checked_in_attendees == 0


def test_to_dict_uses_api_names(service, stats_service):
    service.create(make_payload())

    assert stats_service.compute().to_dict() == {
        "totalRegistrations": 1,
        "totalAdults": 2,
        "totalChildren": 1,
        "totalAttendees": 3,
        "checkedInRegistrations": 0,
        "checkedInAdults": 0,
        "checkedInChildren": 0,
        "checkedInAttendees": 0,
    }
