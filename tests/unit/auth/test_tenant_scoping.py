from __future__ import annotations

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from linkreach.auth.tenant_context import TenantContext, enforce_tenant_match, from_claims, scope_query
from linkreach.core.exceptions import AuthenticationError, NotFoundError
from linkreach.models import Base, Campaign, Company, Message, Prospect, UserProfile


def _build_session():
    engine = create_engine("sqlite:///:memory:")
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    return TestingSessionLocal()


def _seed(session):
    acme = Company(name="Acme")
    globex = Company(name="Globex")
    session.add_all([acme, globex])
    session.flush()
    users = {
        role: UserProfile(
            company_id=acme.id,
            email=f"{role}@acme.test",
            full_name=f"Acme {role}",
            role=role,
            hashed_password="x",
        )
        for role in ("admin", "manager", "rep")
    }
    outsider = UserProfile(company_id=globex.id, email="admin@globex.test", full_name="Globex admin", role="admin", hashed_password="x")
    session.add_all([*users.values(), outsider])
    session.flush()

    rep_campaign = Campaign(company_id=acme.id, name="Rep work", message_template="Hi")
    other_campaign = Campaign(company_id=acme.id, name="Manager work", message_template="Hi")
    foreign_campaign = Campaign(company_id=globex.id, name="Globex", message_template="Hi")
    session.add_all([rep_campaign, other_campaign, foreign_campaign])
    session.flush()

    rep_prospect = Prospect(
        company_id=acme.id, campaign_id=rep_campaign.id, first_name="Ann", full_name="Ann", assigned_to=users["rep"].id
    )
    manager_prospect = Prospect(
        company_id=acme.id, campaign_id=other_campaign.id, first_name="Bo", full_name="Bo", assigned_to=users["manager"].id
    )
    foreign_prospect = Prospect(company_id=globex.id, campaign_id=foreign_campaign.id, first_name="Cy", full_name="Cy")
    session.add_all([rep_prospect, manager_prospect, foreign_prospect])
    session.flush()
    session.add_all(
        [
            Message(company_id=acme.id, prospect_id=rep_prospect.id, content="rep note", sent_by=users["rep"].id),
            Message(company_id=acme.id, prospect_id=manager_prospect.id, content="mgr note", sent_by=users["manager"].id),
        ]
    )
    session.commit()
    return users, outsider


def _context(user):
    return TenantContext(user_id=user.id, company_id=user.company_id, role=user.role)


def test_admin_and_manager_see_every_company_row_but_no_foreign_rows():
    session = _build_session()
    users, _ = _seed(session)
    for role in ("admin", "manager"):
        context = _context(users[role])
        prospects = scope_query(session.query(Prospect), Prospect, context).all()
        assert sorted(p.first_name for p in prospects) == ["Ann", "Bo"]
        assert scope_query(session.query(Campaign), Campaign, context).count() == 2
        assert scope_query(session.query(Message), Message, context).count() == 2
    session.close()


def test_rep_sees_only_own_prospects_messages_and_their_campaigns():
    session = _build_session()
    users, _ = _seed(session)
    context = _context(users["rep"])

    assert [p.first_name for p in scope_query(session.query(Prospect), Prospect, context)] == ["Ann"]
    assert [m.content for m in scope_query(session.query(Message), Message, context)] == ["rep note"]
    assert [c.name for c in scope_query(session.query(Campaign), Campaign, context)] == ["Rep work"]
    session.close()


def test_other_company_sees_nothing_of_acme():
    session = _build_session()
    _, outsider = _seed(session)
    context = _context(outsider)
    assert [p.first_name for p in scope_query(session.query(Prospect), Prospect, context)] == ["Cy"]
    assert scope_query(session.query(Message), Message, context).count() == 0
    session.close()


def test_enforce_tenant_match_reports_missing():
    context = TenantContext(user_id=1, company_id=1, role="admin")
    enforce_tenant_match(1, context)
    with pytest.raises(NotFoundError):
        enforce_tenant_match(2, context)


def test_from_claims_requires_company_context():
    context = from_claims({"sub": "4", "company_id": 9, "role": "Manager"})
    assert context == TenantContext(user_id=4, company_id=9, role="manager")
    with pytest.raises(AuthenticationError):
        from_claims({"sub": "4", "role": "rep"})
