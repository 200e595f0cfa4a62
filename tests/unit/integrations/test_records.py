from __future__ import annotations

from linkreach.integrations.records import PersonRecord, merge_enrichment, parse_people


def test_best_email_prefers_unlocked_direct_email():
    person = PersonRecord(email="ann@acme.com", personal_emails=["ann@gmail.com"])
    assert person.best_email == "ann@acme.com"


def test_locked_email_falls_back_to_personal_email():
    person = PersonRecord(email="email_not_unlocked@domain.com", personal_emails=["ann@gmail.com"])
    assert person.best_email == "ann@gmail.com"


def test_missing_direct_email_falls_back_to_personal_email():
    person = PersonRecord(personal_emails=["ann@gmail.com", "ann@yahoo.com"])
    assert person.best_email == "ann@gmail.com"


def test_locked_email_without_personal_email_is_absent():
    person = PersonRecord(email="EMAIL_NOT_UNLOCKED@domain.com")
    assert person.best_email is None
    assert PersonRecord().best_email is None


def test_best_phone_uses_first_numbered_entry():
    person = PersonRecord(phone_numbers=[{"raw_number": None}, {"sanitized_number": "+15550100"}])
    assert person.best_phone == "+15550100"
    assert PersonRecord(phone="+1 555 0199", phone_numbers=[{"raw_number": "x"}]).best_phone == "+1 555 0199"


def test_wrong_typed_provider_fields_collapse():
    person = PersonRecord.model_validate(
        {
            "id": 42,
            "name": {"full": "Ann"},
            "personal_emails": "ann@gmail.com",
            "phone_numbers": None,
            "organization": "Acme",
            "unknown_field": "ignored",
        }
    )
    assert person.id == "42"
    assert person.name is None
    assert person.personal_emails == []
    assert person.phone_numbers == []
    assert person.organization is None


def test_display_name_and_location():
    person = PersonRecord(first_name="Ann", last_name="Lee", city="Denver", country="United States")
    assert person.display_name == "Ann Lee"
    assert person.location == "Denver, United States"


def test_parse_people_drops_non_objects():
    people = parse_people([{"id": "a"}, "junk", None, {"id": "b"}])
    assert [person.id for person in people] == ["a", "b"]
    assert parse_people(None) == []


def test_merge_enrichment_only_changes_contact_fields():
    base = PersonRecord(
        id="a",
        name="Ann Lee",
        title="VP Sales",
        linkedin_url="https://linkedin.com/in/ann",
        city="Denver",
        email="email_not_unlocked@domain.com",
        organization={"name": "Acme"},
    )
    enriched = PersonRecord(
        id="a",
        name="Annie L.",
        title="Chief Revenue Officer",
        linkedin_url="https://linkedin.com/in/someone-else",
        city="Boston",
        email="ann@acme.com",
        personal_emails=["ann@gmail.com"],
        phone="+15550100",
        organization={"name": "Acme Holdings", "industry": "Software"},
    )

    merged = merge_enrichment(base, enriched)

    assert merged.name == "Ann Lee"
    assert merged.title == "VP Sales"
    assert merged.linkedin_url == "https://linkedin.com/in/ann"
    assert merged.city == "Denver"
    assert merged.organization.name == "Acme"
    assert merged.organization.industry == "Software"
    assert merged.best_email == "ann@acme.com"
    assert merged.best_phone == "+15550100"


def test_merge_enrichment_keeps_base_contact_when_enrichment_is_empty():
    base = PersonRecord(id="a", email="ann@acme.com")
    merged = merge_enrichment(base, PersonRecord(id="a"))
    assert merged.email == "ann@acme.com"
    assert merged.organization is None


def test_merge_prefers_enriched_personal_email_over_locked_base_email():
    base = PersonRecord(id="a", name="Ann Lee", email="email_not_unlocked@domain.com")
    enriched = PersonRecord(id="a", personal_emails=["ann@gmail.com"])
    assert merge_enrichment(base, enriched).best_email == "ann@gmail.com"
