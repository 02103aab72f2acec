from datetime import datetime

import pytest

from subify.core.errors import ConflictError, NotFoundError
from subify.models.reseller import ResellerUpdateRequest
from subify.services.reseller_service import (
    delete_reseller,
    get_reseller,
    list_resellers,
    set_reseller_banned,
    update_reseller_info,
)
from subify.services.submission_service import get_submission, list_submissions


def test_list_resellers_excludes_admin(db):
    assert {r.id for r in list_resellers()} == {"reseller-001", "reseller-002"}


def test_ban_and_unban(db):
    banned = set_reseller_banned("reseller-001", True, now=datetime(2024, 3, 1))

    assert banned.banned is True
    assert banned.updatedAt == datetime(2024, 3, 1)
    assert banned.name == "Reseller One"
    assert get_reseller("reseller-001").banned is True

    assert set_reseller_banned("reseller-001", False).banned is False


def test_ban_unknown_or_admin_account(db):
    with pytest.raises(NotFoundError):
        set_reseller_banned("reseller-999", True)
    with pytest.raises(NotFoundError):
        set_reseller_banned("admin-001", True)


def test_update_only_given_fields(db):
    updated = update_reseller_info("reseller-002", ResellerUpdateRequest(phone="01711111111"))

    assert updated.phone == "01711111111"
    assert updated.name == "Reseller Two"
    assert updated.email == "reseller2@example.com"


def test_update_name_and_email(db):
    updated = update_reseller_info(
        "reseller-002",
        ResellerUpdateRequest(name="  Second Shop ", email="shop2@example.com"),
    )

    assert updated.name == "Second Shop"
    assert get_reseller("reseller-002").email == "shop2@example.com"


def test_update_rejects_email_of_another_account(db):
    with pytest.raises(ConflictError) as exc_info:
        update_reseller_info("reseller-002", ResellerUpdateRequest(email="reseller@example.com"))

    assert exc_info.value.status_code == 409
    assert get_reseller("reseller-002").email == "reseller2@example.com"


def test_update_keeps_own_email(db):
    updated = update_reseller_info("reseller-002", ResellerUpdateRequest(email="reseller2@example.com"))

    assert updated.email == "reseller2@example.com"


def test_reseller_found_by_mongo_object_id(db):
    object_id = str(db.users.find_one({"id": "reseller-001"})["_id"])

    assert set_reseller_banned(object_id, True).id == "reseller-001"


def test_delete_removes_reseller_submissions(make_submission, db):
    doomed = make_submission(email="a@example.com", reseller_id="reseller-001")
    make_submission(email="b@example.com", reseller_id="reseller-001")
    kept = make_submission(email="c@example.com", reseller_id="reseller-002")
    admin_entry = make_submission(email="d@example.com")

    result = delete_reseller("reseller-001")

    assert result.success is True
    assert result.deletedSubmissions == 2
    assert db.users.find_one({"id": "reseller-001"}) is None
    with pytest.raises(NotFoundError):
        get_submission(doomed.id)
    assert {s.id for s in list_submissions()} == {kept.id, admin_entry.id}


def test_delete_unknown_reseller(db):
    with pytest.raises(NotFoundError):
        delete_reseller("reseller-999")

    assert db.users.count_documents({"role": "reseller"}) == 2
