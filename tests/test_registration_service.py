from __future__ import annotations

import pytest

from conftest import make_payload
from registration_portal.core.enums import SortField, SortOrder
from registration_portal.core.exceptions import ConflictError, InternalError, NotFoundError, ValidationError


def test_create_then_get_round_trip(service):
    created = service.create(make_payload())

    fetched = service.get(created.registration_id)
    assert fetched == created
    assert fetched.total_attendees == 3
    assert fetched.is_checked_in is False
    assert (fetched.checked_in_adults, fetched.checked_in_children) == (0, 0)


def test_duplicate_mobile_is_rejected(service, repo):
    service.create(make_payload())

    with pytest.raises(ConflictError) as exc:
        service.create(make_payload(email="other@gmail.com", mobileNumber="501 234 567"))

    assert exc.value.field == "mobileNumber"
    assert len(repo.list_all(search=None, sort_field=SortField.CREATED_AT, sort_order=SortOrder.DESC)) == 1


def test_same_number_with_other_country_code_is_allowed(service):
    service.create(make_payload(mobileCountryCode="+91", mobileNumber="9876543210"))
    service.create(make_payload(email="x@gmail.com", mobileCountryCode="+92", mobileNumber="9876543210"))


def test_duplicate_email_is_rejected(service):
    service.create(make_payload())

    with pytest.raises(ConflictError) as exc:
        service.create(make_payload(mobileNumber="509999999", email="RAHMAN@gmail.com"))
    assert exc.value.field == "email"


def test_store_conflict_surfaces_as_conflict(service, repo, monkeypatch):
    # Another request wins the race between the pre-check and the insert.
    monkeypatch.setattr(repo, "find_by_mobile", lambda code, number: None)
    service.create(make_payload())

    with pytest.raises(ConflictError):
        service.create(make_payload(email=""))


def test_store_failure_becomes_internal_error(service, repo):
    repo.fail_with = RuntimeError("connection refused")

    with pytest.raises(InternalError) as exc:
        service.create(make_payload())
    assert "connection refused" not in str(exc.value)


def test_get_requires_id_and_reports_unknown(service):
    with pytest.raises(ValidationError):
        service.get("  ")
    with pytest.raises(NotFoundError):
        service.get("missing")


def test_is_email_available(service):
    service.create(make_payload())

    assert service.is_email_available("Rahman@gmail.com") is False
    assert service.is_email_available("someone@gmail.com") is True
    with pytest.raises(ValidationError):
        service.is_email_available("")


def test_check_in_within_bounds(service):
    r = service.create(make_payload(adultsCount=3, childrenCount=2))

    updated = service.check_in(r.registration_id, checked_in_adults=2, checked_in_children=1)

    assert updated.is_checked_in is True
    assert (updated.checked_in_adults, updated.checked_in_children) == (2, 1)


def test_check_in_over_registered_counts_is_rejected(service):
    r = service.create(make_payload(adultsCount=3, childrenCount=2))

    with pytest.raises(ValidationError) as exc:
        service.check_in(r.registration_id, checked_in_adults=4, checked_in_children=0)

    assert str(exc.value) == "Cannot check in more than registered: 3 adults, 2 children"
    unchanged = service.get(r.registration_id)
    assert unchanged.is_checked_in is False
    assert unchanged.checked_in_adults == 0


def test_check_in_rejects_string_counts(service):
    r = service.create(make_payload())

    with pytest.raises(ValidationError):
        service.check_in(r.registration_id, checked_in_adults="2", checked_in_children=0)


def test_check_in_rejects_negative_counts(service):
    r = service.create(make_payload())

    with pytest.raises(ValidationError):
        service.check_in(r.registration_id, checked_in_adults=-1, checked_in_children=0)


def test_set_check_in_defaults_to_full_party(service):
    r = service.create(make_payload(adultsCount=4, childrenCount=3))

    updated = service.set_check_in(r.registration_id, is_checked_in=True)

    assert (updated.checked_in_adults, updated.checked_in_children) == (4, 3)


def test_check_out_resets_counts(service):
    r = service.create(make_payload(adultsCount=2, childrenCount=1))
    service.check_in(r.registration_id, checked_in_adults=2, checked_in_children=1)

    updated = service.set_check_in(r.registration_id, is_checked_in=False, checked_in_adults=2)

    assert updated.is_checked_in is False
    assert (updated.checked_in_adults, updated.checked_in_children) == (0, 0)


def test_set_check_in_requires_boolean_status(service):
    r = service.create(make_payload())

    with pytest.raises(ValidationError):
        service.set_check_in(r.registration_id, is_checked_in="true")


def test_list_paginates_and_searches(service):
    for i in range(5):
        service.create(
            make_payload(
                name=f"Member {i}",
                email=f"member{i}@gmail.com",
                mobileNumber=f"50000000{i}",
                houseName="Kizhakkeveedu" if i % 2 else "Padinjare",
            )
        )

    page = service.list(page=2, limit=2)
    assert page.total_count == 5
    assert page.total_pages == 3
    # Newest first by default
    assert [r.name for r in page.registrations] == ["Member 2", "Member 1"]

    found = service.list(search="kizhakke", sort_by="name", sort_order="asc")
    assert [r.name for r in found.registrations] == ["Member 1", "Member 3"]

    assert service.list(search="nobody").total_pages == 0


def test_list_rejects_bad_parameters(service):
    with pytest.raises(ValidationError):
        service.list(sort_by="password")
    with pytest.raises(ValidationError):
        service.list(page=0)


def test_list_filters_by_check_in_status(service):
    a = service.create(make_payload(name="Fathima", email="f@gmail.com", mobileNumber="501111111"))
    service.create(make_payload(name="Fasil", email="fa@gmail.com", mobileNumber="502222222"))
    service.check_in(a.registration_id, checked_in_adults=1, checked_in_children=0)

    def names(status):
        return sorted(r.name for r in service.list(check_in_status=status).registrations)

    assert names("checked-in") == ["Fathima"]
    assert names("not-checked-in") == ["Fasil"]
    assert names("true") == ["Fathima"]
    assert names(False) == ["Fasil"]
    assert names("all") == names(None) == ["Fasil", "Fathima"]
    assert [r.name for r in service.list_for_export(check_in_status="checked-in")] == ["Fathima"]


def test_list_rejects_unknown_check_in_status(service):
    with pytest.raises(ValidationError) as exc:
        service.list(check_in_status="maybe")
    assert "checkInStatus" in exc.value.errors


def test_list_caps_page_size(service):
    assert service.list(limit=10_000).limit == 500


def test_search_for_checkin_skips_checked_in_and_short_terms(service):
    a = service.create(make_payload(name="Fathima", email="f@gmail.com", mobileNumber="501111111"))
    service.create(make_payload(name="Fasil", email="fa@gmail.com", mobileNumber="502222222"))
    service.check_in(a.registration_id, checked_in_adults=1, checked_in_children=0)

    assert service.search_for_checkin("f") == []
    assert [r.name for r in service.search_for_checkin("fa")] == ["Fasil"]


def test_delete(service):
    r = service.create(make_payload())

    deleted = service.delete(r.registration_id)

    assert deleted.name == "Abdul Rahman"
    with pytest.raises(NotFoundError):
        service.get(r.registration_id)
    with pytest.raises(NotFoundError):
        service.delete(r.registration_id)
