"""Tests for repository queries against the test database."""

from intradesk.storage import repositories


async def test_pending_count_badge_types_only(db_session):
    """Only unprocessed customer and reservation applications are pending."""
    for application_type, status in [
        ("customer_registration", "unprocessed"),
        ("customer_change", "unprocessed"),
        ("facility_reservation", "unprocessed"),
        ("facility_reservation", "processing"),
        ("customer_change", "processed"),
        ("proposal", "unprocessed"),
    ]:
        app = await repositories.create_application(
            db_session, application_type, "Sato", "Request", {}
        )
        app.status = status
    await db_session.commit()

    assert await repositories.count_pending_applications(db_session) == 3


async def test_pending_count_empty(db_session):
    """No applications means no badge."""
    assert await repositories.count_pending_applications(db_session) == 0
