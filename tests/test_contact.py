from config import settings


def submit(client):
    return client.post("/api/contact", json={"name": "Ann", "email": "ann@b.com", "message": "Hello"})


def test_contact_saved_and_notified(client, db, mailer):
    res = submit(client)
    assert res.status_code == 200
    assert res.json() == {"message": "Message received successfully!"}

    stored = db.contacts.find_one()
    assert (stored["name"], stored["email"], stored["message"]) == ("Ann", "ann@b.com", "Hello")

    (sent,) = mailer.sent
    assert sent["to"] == settings.CONTACT_INBOX
    assert sent["subject"] == "New Contact Form Submission"
    assert "Name: Ann" in sent["text"]
    assert "Message: Hello" in sent["text"]


def test_contact_succeeds_when_email_fails(client, db, mailer):
    mailer.fail = True
    res = submit(client)
    assert res.status_code == 200
    assert db.contacts.count_documents({}) == 1


def test_contact_accepts_empty_form(client, db):
    res = client.post("/api/contact", json={})
    assert res.status_code == 200
    assert db.contacts.count_documents({}) == 1
