"""API tests for event proposals."""

SUBMISSION = {
    "proposer_name": "Kato",
    "proposal_year": "2026",
    "proposals": [
        {"event_name": "Spring fair", "timing": "April", "type": "Sales", "content": "Booth"},
        {"event_name": "Color seminar", "timing": "June", "type": "Training", "content": "Hands-on"},
    ],
}


async def test_each_item_becomes_a_row(client, mailer):
    """Two proposed events give two rows and one notification mail."""
    await client.post("/v1/settings", json={"proposal_emails": ["events@example.com"]})
    response = await client.post("/v1/proposals", json=SUBMISSION)
    assert response.status_code == 201
    body = response.json()
    assert len(body["ids"]) == 2
    assert body["notification_sent"] is True

    assert len(mailer.sent) == 1
    _, subject, text = mailer.sent[0]
    assert "Kato" in subject
    assert "--- Proposal 2 ---" in text

    rows = (await client.get("/v1/proposals", params={"year": "2026"})).json()
    assert sorted(r["event_name"] for r in rows) == ["Color seminar", "Spring fair"]
    assert (await client.get("/v1/proposals", params={"year": "2025"})).json() == []


async def test_empty_proposal_list_rejected(client):
    """At least one event is required."""
    response = await client.post("/v1/proposals", json={**SUBMISSION, "proposals": []})
    assert response.status_code == 422


async def test_closed_proposals_rejected(client):
    """Submissions bounce while proposals are closed."""
    await client.post("/v1/settings", json={"is_proposal_open": False})
    response = await client.post("/v1/proposals", json=SUBMISSION)
    assert response.status_code == 400
    assert (await client.get("/v1/proposals")).json() == []


async def test_proposal_history_by_year(client):
    """Submission history filters proposals by year."""
    await client.post("/v1/proposals", json=SUBMISSION)
    await client.post("/v1/proposals", json={**SUBMISSION, "proposal_year": "2027"})

    response = await client.get("/v1/submissions", params={"type": "proposals", "year": "2027"})
    assert response.status_code == 200
    assert len(response.json()) == 2
    assert {r["proposer_name"] for r in response.json()} == {"Kato"}
