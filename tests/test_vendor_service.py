import pytest

from vendor_api.core.exceptions import NotFoundError, ValidationError
from vendor_api.schemas.vendor import VendorCreate, VendorUpdate
from vendor_api.services.vendor import VendorService, missing_required

ALICE = "alice@x.com"
BOB = "bob@x.com"


def _vendor(name: str = "Acme", **extra) -> VendorCreate:
    data = {
        "vendorName": name,
        "bankAccountNo": "123",
        "bankName": "Chase",
        "addressLine2": "Suite 1",
    }
    data.update(extra)
    return VendorCreate.model_validate(data)


async def test_create_forces_owner(db_session):
    svc = VendorService(db_session, ALICE)
    vendor = await svc.create(_vendor(userEmail="mallory@x.com", user_email="mallory@x.com"))
    assert vendor.user_email == ALICE
    assert vendor.id
    assert vendor.created_at is not None
    assert vendor.updated_at is not None


async def test_create_lists_every_missing_field(db_session):
    svc = VendorService(db_session, ALICE)
    with pytest.raises(ValidationError) as exc:
        await svc.create(VendorCreate.model_validate({"vendorName": "  ", "bankName": "Chase"}))
    assert exc.value.fields == ["vendorName", "bankAccountNo", "addressLine2"]
    assert await svc._repo.count() == 0


async def test_other_principal_sees_not_found(db_session):
    vendor = await VendorService(db_session, ALICE).create(_vendor())
    bob = VendorService(db_session, BOB)

    with pytest.raises(NotFoundError):
        await bob.get_one(vendor.id)
    with pytest.raises(NotFoundError):
        await bob.update(vendor.id, VendorUpdate(bank_name="Stolen"))
    with pytest.raises(NotFoundError):
        await bob.delete(vendor.id)

    kept = await VendorService(db_session, ALICE).get_one(vendor.id)
    assert kept.bank_name == "Chase"


async def test_unknown_id_is_not_found(db_session):
    with pytest.raises(NotFoundError):
        await VendorService(db_session, ALICE).get_one("does-not-exist")


async def test_update_merges_and_keeps_owner(db_session):
    svc = VendorService(db_session, ALICE)
    vendor = await svc.create(_vendor(city="Austin"))

    updated = await svc.update(
        vendor.id,
        VendorUpdate.model_validate({"bankName": "X", "userEmail": "other@x.com"}),
    )
    assert updated.id == vendor.id
    assert updated.bank_name == "X"
    assert updated.vendor_name == "Acme"
    assert updated.address_line2 == "Suite 1"
    assert updated.city == "Austin"
    assert updated.user_email == ALICE


async def test_update_rejects_blank_required_field(db_session):
    svc = VendorService(db_session, ALICE)
    vendor = await svc.create(_vendor())
    with pytest.raises(ValidationError) as exc:
        await svc.update(vendor.id, VendorUpdate.model_validate({"addressLine2": ""}))
    assert exc.value.fields == ["addressLine2"]


async def test_update_can_clear_optional_field(db_session):
    svc = VendorService(db_session, ALICE)
    vendor = await svc.create(_vendor(city="Austin"))
    updated = await svc.update(vendor.id, VendorUpdate.model_validate({"city": None}))
    assert updated.city is None


async def test_delete_twice(db_session):
    svc = VendorService(db_session, ALICE)
    vendor = await svc.create(_vendor())
    await svc.delete(vendor.id)
    with pytest.raises(NotFoundError):
        await svc.delete(vendor.id)


async def test_pagination_math(db_session):
    svc = VendorService(db_session, ALICE)
    for i in range(25):
        await svc.create(_vendor(f"Vendor {i}"))

    items, meta = await svc.list_page(1, 10)
    assert len(items) == 10
    assert (meta.page, meta.limit, meta.total, meta.pages) == (1, 10, 25, 3)
    assert items[0].vendor_name == "Vendor 24"

    items, meta = await svc.list_page(3, 10)
    assert len(items) == 5
    assert items[-1].vendor_name == "Vendor 0"

    items, meta = await svc.list_page(4, 10)
    assert items == []
    assert meta.total == 25


async def test_listing_is_owner_scoped(db_session):
    alice = VendorService(db_session, ALICE)
    bob = VendorService(db_session, BOB)
    await alice.create(_vendor("A1"))
    await bob.create(_vendor("B1"))
    await alice.create(_vendor("A2"))

    items, meta = await alice.list_page(1, 10)
    assert meta.total == 2
    assert {v.vendor_name for v in items} == {"A1", "A2"}
    assert all(v.user_email == ALICE for v in items)

    _, meta = await VendorService(db_session, "carol@x.com").list_page(1, 10)
    assert (meta.total, meta.pages) == (0, 0)


def test_missing_required_partial():
    assert missing_required({"bank_name": "X"}, partial=True) == []
    assert missing_required({"bank_name": None}, partial=True) == ["bank_name"]
    assert missing_required({}) == ["vendor_name", "bank_account_no", "bank_name", "address_line2"]


async def test_equal_timestamps_page_stably(db_session):
    from datetime import datetime, timezone

    from vendor_api.domain.vendor import Vendor

    stamp = datetime(2026, 1, 1, tzinfo=timezone.utc)
    for i in range(5):
        db_session.add(
            Vendor(
                vendor_name=f"Tie {i}",
                bank_account_no="123",
                bank_name="Chase",
                address_line2="Suite 1",
                user_email=ALICE,
                created_at=stamp,
                updated_at=stamp,
            )
        )
    await db_session.flush()

    svc = VendorService(db_session, ALICE)
    seen = []
    for page in (1, 2, 3):
        items, _ = await svc.list_page(page, 2)
        seen.extend(v.id for v in items)

    assert len(seen) == 5
    assert seen == sorted(seen, reverse=True)
