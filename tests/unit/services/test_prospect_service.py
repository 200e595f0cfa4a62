from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from linkreach.auth.tenant_context import TenantContext
from linkreach.core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from linkreach.models import Base, Campaign, Company, UserProfile
from linkreach.schemas.discovery import ProspectCandidate
from linkreach.schemas.prospects import ProspectCreateRequest, ProspectUpdateRequest
from linkreach.services.prospect_service import ProspectService


def _build_session():
    engine = create_engine("sqlite:///:memory:")
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal()


def _seed(session, company_name="Acme"):
    company = Company(name=company_name)
    session.add(company)
    session.flush()
    users = {}
    for role in ("admin", "manager", "rep"):
        users[role] = UserProfile(
            company_id=company.id,
            email=f"{role}@{company_name.lower()}.test",
            full_name=f"{company_name} {role}",
            role=role,
            hashed_password="x",
        )
        session.add(users[role])
    campaign = Campaign(company_id=company.id, name="Outbound", message_template="Hi", status="active")
    session.add(campaign)
    session.commit()
    return campaign, users


def _context(user):
    return TenantContext(user_id=user.id, company_id=user.company_id, role=user.role)


def _payload(**overrides):
    data = {
        "linkedin_url": "https://linkedin.com/in/ann-lee",
        "first_name": "Ann",
        "last_name": "Lee",
        "company": "Initech",
    }
    data.update(overrides)
    return ProspectCreateRequest(**data)


def test_rep_created_prospects_are_assigned_to_the_rep():
    session = _build_session()
    campaign, users = _seed(session)
    prospect = ProspectService(session, _context(users["rep"])).create_prospect(_payload(campaign_id=campaign.id))

    assert prospect.assigned_to == users["rep"].id
    assert prospect.full_name == "Ann Lee"
    assert prospect.status == "new"
    session.close()


def test_rep_cannot_assign_prospects_to_someone_else():
    session = _build_session()
    _, users = _seed(session)
    with pytest.raises(AuthorizationError):
        ProspectService(session, _context(users["rep"])).create_prospect(_payload(assigned_to=users["manager"].id))
    session.close()


def test_manager_can_only_assign_within_company():
    session = _build_session()
    _, users = _seed(session, "Acme")
    _, outsiders = _seed(session, "Globex")
    service = ProspectService(session, _context(users["manager"]))

    assigned = service.create_prospect(_payload(assigned_to=users["rep"].id))
    assert assigned.assigned_to == users["rep"].id
    with pytest.raises(ValidationError):
        service.create_prospect(_payload(linkedin_url="https://linkedin.com/in/bo", assigned_to=outsiders["rep"].id))
    session.close()


def test_duplicate_profile_url_in_same_campaign_conflicts():
    session = _build_session()
    campaign, users = _seed(session)
    other = Campaign(company_id=campaign.company_id, name="Other", message_template="Hi")
    session.add(other)
    session.commit()
    service = ProspectService(session, _context(users["admin"]))

    service.create_prospect(_payload(campaign_id=campaign.id))
    with pytest.raises(ConflictError):
        service.create_prospect(_payload(campaign_id=campaign.id))
    assert service.create_prospect(_payload(campaign_id=other.id)).campaign_id == other.id
    session.close()


def test_unknown_campaign_is_not_found():
    session = _build_session()
    _, users = _seed(session)
    with pytest.raises(NotFoundError):
        ProspectService(session, _context(users["admin"])).create_prospect(_payload(campaign_id=999))
    session.close()


def test_list_paginates_and_filters():
    session = _build_session()
    campaign, users = _seed(session)
    service = ProspectService(session, _context(users["admin"]))
    for index in range(5):
        service.create_prospect(
            _payload(campaign_id=campaign.id, linkedin_url=f"https://linkedin.com/in/p{index}", first_name=f"P{index}")
        )

    rows, total = service.list_prospects(campaign_id=campaign.id, page=2, limit=2)
    assert total == 5
    assert len(rows) == 2
    _, contacted_total = service.list_prospects(status="contacted")
    assert contacted_total == 0
    session.close()


def test_rep_cannot_read_or_edit_unassigned_prospects():
    session = _build_session()
    _, users = _seed(session)
    prospect = ProspectService(session, _context(users["manager"])).create_prospect(_payload())
    rep_service = ProspectService(session, _context(users["rep"]))

    with pytest.raises(NotFoundError):
        rep_service.get_prospect(prospect.id)
    assert rep_service.list_prospects() == ([], 0)
    session.close()


def test_update_recomputes_full_name_and_guards_reassignment():
    session = _build_session()
    _, users = _seed(session)
    prospect = ProspectService(session, _context(users["rep"])).create_prospect(_payload())
    rep_service = ProspectService(session, _context(users["rep"]))

    updated = rep_service.update_prospect(prospect.id, ProspectUpdateRequest(last_name="Park", status="responded"))
    assert updated.full_name == "Ann Park"
    assert updated.status == "responded"
    with pytest.raises(AuthorizationError):
        rep_service.update_prospect(prospect.id, ProspectUpdateRequest(assigned_to=users["manager"].id))

    manager_service = ProspectService(session, _context(users["manager"]))
    reassigned = manager_service.update_prospect(prospect.id, ProspectUpdateRequest(assigned_to=users["manager"].id))
    assert reassigned.assigned_to == users["manager"].id
    session.close()


def test_add_candidates_skips_existing_and_repeated_urls():
    session = _build_session()
    campaign, users = _seed(session)
    service = ProspectService(session, _context(users["manager"]))
    service.create_prospect(_payload(campaign_id=campaign.id))

    created, skipped = service.add_candidates(
        campaign,
        [
            ProspectCandidate(name="Ann Lee", profile_url="https://linkedin.com/in/ann-lee"),
            ProspectCandidate(name="Bo van Chen", profile_url="https://linkedin.com/in/bo", email="bo@hooli.test"),
            ProspectCandidate(name="Bo van Chen", profile_url="https://linkedin.com/in/bo"),
            ProspectCandidate(name="No Url"),
        ],
    )

    assert skipped == 2
    assert [(p.first_name, p.last_name) for p in created] == [("Bo", "van Chen"), ("No", "Url")]
    assert created[0].email == "bo@hooli.test"
    assert created[0].assigned_to is None
    session.close()


def test_add_candidates_assigns_rep_callers():
    session = _build_session()
    campaign, users = _seed(session)
    created, _ = ProspectService(session, _context(users["rep"])).add_candidates(
        campaign, [ProspectCandidate(name="Cy Ng", profileUrl="https://linkedin.com/in/cy")]
    )
    assert created[0].assigned_to == users["rep"].id
    session.close()


def test_add_candidates_all_duplicates_conflicts():
    session = _build_session()
    campaign, users = _seed(session)
    service = ProspectService(session, _context(users["admin"]))
    service.create_prospect(_payload(campaign_id=campaign.id))

    with pytest.raises(ConflictError):
        service.add_candidates(campaign, [ProspectCandidate(name="Ann", profile_url="https://linkedin.com/in/ann-lee")])
    session.close()


def test_add_candidates_requires_names():
    session = _build_session()
    campaign, users = _seed(session)
    with pytest.raises(ValidationError):
        ProspectService(session, _context(users["admin"])).add_candidates(
            campaign, [ProspectCandidate(name="  ", profile_url="https://linkedin.com/in/nameless")]
        )
    session.close()
