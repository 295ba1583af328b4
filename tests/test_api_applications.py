"""API tests for application submission and the processing workflow."""

RESERVATION = {
    "application_type": "facility_reservation",
    "applicant_name": "Sato",
    "title": "Facility reservation (Room A)",
    "details": {
        "applicant": "Sato",
        "usage_date": "2025-10-20",
        "facility": "Room A",
        "start_time": "10:00",
        "end_time": "11:00",
        "purpose": "Client meeting",
    },
}

REGISTRATION = {
    "application_type": "customer_registration",
    "applicant_name": "Ito",
    "title": "New customer registration",
    "details": {
        "customer_name_full": "Salon Hana",
        "contact_person": "Ito",
        "zip_code": "1500001",
        "loyalty_tier": "gold",
    },
}

PROPOSAL = {
    "application_type": "proposal",
    "applicant_name": "Kato",
    "title": "Event proposals 2026",
    "details": {
        "proposal_year": "2026",
        "proposals": [
            {"event_name": "Spring fair", "timing": "April", "type": "Sales", "content": "Booth"}
        ],
    },
}


async def submit(client, payload):
    response = await client.post("/v1/applications", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_submit_sends_notification(client, mailer):
    """The reservation list receives the mail after the row is stored."""
    await client.post("/v1/settings", json={"reservation_emails": ["desk@example.com", ""]})
    body = await submit(client, RESERVATION)

    assert body["notification_sent"] is True
    assert body["warnings"] == []
    recipients, subject, text = mailer.sent[0]
    assert recipients == ["desk@example.com"]
    assert subject == RESERVATION["title"]
    assert "Facility: Room A" in text


async def test_mail_failure_keeps_application(client, mailer):
    """A failed mail is a warning; the application is still stored."""
    await client.post("/v1/settings", json={"customer_emails": ["sales@example.com"]})
    mailer.fail = True
    body = await submit(client, REGISTRATION)

    assert body["notification_sent"] is False
    assert body["warnings"] == ["Notification e-mail could not be delivered"]
    response = await client.get(f"/v1/applications/{body['id']}")
    assert response.status_code == 200


async def test_no_recipients_skips_mail(client, mailer):
    """Without a mailing list nothing is sent and nothing is reported."""
    body = await submit(client, RESERVATION)
    assert body["notification_sent"] is False
    assert body["warnings"] == []
    assert mailer.sent == []


async def test_invalid_details_rejected(client):
    """Missing required detail fields fail validation and store nothing."""
    payload = {**RESERVATION, "details": {"applicant": "Sato"}}
    response = await client.post("/v1/applications", json=payload)
    assert response.status_code == 422
    assert (await client.get("/v1/applications")).json() == []


async def test_unknown_type_rejected(client):
    """application_type must be one of the known variants."""
    payload = {**RESERVATION, "application_type": "leave_request"}
    response = await client.post("/v1/applications", json=payload)
    assert response.status_code == 422


async def test_get_application_labels(client):
    """Detail rows carry labels; unknown keys keep their name."""
    body = await submit(client, REGISTRATION)
    response = await client.get(f"/v1/applications/{body['id']}")
    data = response.json()

    assert data["application_type_label"] == "Customer registration"
    assert data["status"] == "unprocessed"
    assert data["processed_by"] is None
    assert data["details"]["loyalty_tier"] == "gold"
    labels = [item["label"] for item in data["detail_items"]]
    assert labels == ["Customer name (official)", "Contact person", "Postal code", "loyalty_tier"]


async def test_get_missing_application(client):
    """Unknown ids are a 404, distinct from validation errors."""
    response = await client.get("/v1/applications/999")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


async def test_list_filters(client):
    """Type (repeated or comma separated), status and proposal year filters."""
    await submit(client, RESERVATION)
    await submit(client, REGISTRATION)
    await submit(client, PROPOSAL)

    assert len((await client.get("/v1/applications")).json()) == 3

    response = await client.get("/v1/applications", params={"type": "facility_reservation,proposal"})
    assert sorted(a["application_type"] for a in response.json()) == ["facility_reservation", "proposal"]

    response = await client.get(
        "/v1/applications", params=[("type", "customer_registration"), ("type", "proposal")]
    )
    assert len(response.json()) == 2

    response = await client.get("/v1/applications", params={"type": "proposal", "year": "2026"})
    assert len(response.json()) == 1
    response = await client.get("/v1/applications", params={"type": "proposal", "year": "2025"})
    assert response.json() == []

    response = await client.get("/v1/applications", params={"status": "processed"})
    assert response.json() == []


async def test_pending_count_excludes_proposals(client):
    """The badge counts unprocessed customer and reservation applications only."""
    await submit(client, RESERVATION)
    await submit(client, REGISTRATION)
    await submit(client, PROPOSAL)

    response = await client.get("/v1/applications/pending-count")
    assert response.json() == {"count": 2}


async def test_processed_without_processor_rejected(client):
    """Rejected transitions leave the row unchanged."""
    app_id = (await submit(client, RESERVATION))["id"]
    response = await client.put(f"/v1/applications/{app_id}", json={"status": "processed"})
    assert response.status_code == 400
    assert response.json()["code"] == "INVALID_TRANSITION"

    data = (await client.get(f"/v1/applications/{app_id}")).json()
    assert (data["status"], data["processed_by"], data["processed_at"]) == ("unprocessed", None, None)


async def test_full_workflow(client):
    """Assign, process, reopen with confirmation."""
    app_id = (await submit(client, RESERVATION))["id"]

    response = await client.put(f"/v1/applications/{app_id}", json={"processed_by": "Suzuki"})
    assert response.status_code == 200
    assert response.json()["status"] == "unprocessed"
    assert response.json()["processed_by"] == "Suzuki"

    response = await client.put(f"/v1/applications/{app_id}", json={"status": "processed"})
    assert response.status_code == 200
    assert response.json()["status"] == "processed"
    assert response.json()["processed_at"] is not None

    response = await client.get("/v1/applications/pending-count")
    assert response.json() == {"count": 0}

    response = await client.put(f"/v1/applications/{app_id}", json={"status": "unprocessed"})
    assert response.status_code == 400

    response = await client.put(
        f"/v1/applications/{app_id}", json={"status": "unprocessed", "confirmed": True}
    )
    data = response.json()
    assert (data["status"], data["processed_by"], data["processed_at"]) == ("unprocessed", None, None)


async def test_update_missing_application(client):
    """PUT on an unknown id is a 404."""
    response = await client.put("/v1/applications/999", json={"status": "processing"})
    assert response.status_code == 404
