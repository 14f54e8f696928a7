"""
Seed data shared by the test modules.

Rows are returned fresh on every call so a test can mutate them
freely.  They use the snake_case column names the repositories write.
"""

import json
from datetime import date

ASSEMBLY_ID_1 = "assembly-national"
ASSEMBLY_ID_2 = "assembly-senate"
PARTY_ID_1 = "party-green"
PARTY_ID_2 = "party-liberal"
DECISION_ID_1 = "decision-climate"
DECISION_ID_2 = "decision-tax"
DECISION_ID_3 = "decision-education"
OFFICIAL_ID_1 = "official-1"
OFFICIAL_ID_2 = "official-2"
OFFICIAL_ID_3 = "official-3"


def assembly_rows():
    return [
        {"id": ASSEMBLY_ID_1, "name": "National Assembly"},
        {"id": ASSEMBLY_ID_2, "name": "Senate"},
    ]


def party_rows():
    return [
        {"id": PARTY_ID_1, "name": "Green Party", "acronym": "GP", "color": "#00aa00"},
        {"id": PARTY_ID_2, "name": "Liberal Party", "acronym": "LP", "color": "#ffcc00"},
    ]


def decision_rows():
    return [
        {
            "id": DECISION_ID_1,
            "title": "Climate Change Initiative",
            "summary": "A proposal to reduce carbon emissions by 30% over the next decade",
            "full_text": "This proposal includes funding for renewable energy research.",
            "date": date(2023, 3, 15),
            "source": "https://example.com/climate-initiative",
            "assembly_id": ASSEMBLY_ID_1,
            "in_favor": 250,
            "against": 175,
            "abstention": 25,
            "absent": 10,
            "total_voters": 460,
            "is_passed": True,
        },
        {
            "id": DECISION_ID_2,
            "title": "Tax Reform Proposal",
            "summary": "A proposal to restructure the tax system",
            "full_text": "Increase tax revenue while reducing the burden on lower-income individuals.",
            "date": date(2023, 2, 10),
            "source": "https://example.com/tax-reform",
            "assembly_id": ASSEMBLY_ID_1,
            "in_favor": 180,
            "against": 245,
            "abstention": 15,
            "absent": 20,
            "total_voters": 460,
            "is_passed": False,
        },
        {
            "id": DECISION_ID_3,
            "title": "Education Budget Increase",
            "summary": "A proposal to increase the education budget by 10%",
            "full_text": None,
            "date": date(2023, 4, 5),
            "source": "https://example.com/education-budget",
            "assembly_id": ASSEMBLY_ID_2,
            "in_favor": 300,
            "against": 150,
            "abstention": 10,
            "absent": 0,
            "total_voters": 460,
            "is_passed": True,
        },
    ]


def vote_rows():
    return [
        {"id": "vote-1", "decision_id": DECISION_ID_1, "elected_official_id": OFFICIAL_ID_1, "vote_value": "IN_FAVOR"},
        {"id": "vote-2", "decision_id": DECISION_ID_1, "elected_official_id": OFFICIAL_ID_2, "vote_value": "AGAINST"},
        {"id": "vote-3", "decision_id": DECISION_ID_1, "elected_official_id": OFFICIAL_ID_3, "vote_value": "ABSTENTION"},
        {"id": "vote-4", "decision_id": DECISION_ID_2, "elected_official_id": OFFICIAL_ID_1, "vote_value": "AGAINST"},
        {"id": "vote-5", "decision_id": DECISION_ID_2, "elected_official_id": OFFICIAL_ID_2, "vote_value": "AGAINST"},
    ]


def official_rows():
    return [
        {
            "id": OFFICIAL_ID_1,
            "first_name": "Jane",
            "last_name": "Doe",
            "party": "Green Party",
            "party_id": PARTY_ID_1,
            "position": "Deputy",
            "region": "North",
            "assembly_id": ASSEMBLY_ID_1,
            "bio": "Former environmental lawyer",
            "contact_info": json.dumps({"email": "jane.doe@example.com"}),
        },
        {
            "id": OFFICIAL_ID_2,
            "first_name": "John",
            "last_name": "Smith",
            "party": "Liberal Party",
            "party_id": PARTY_ID_2,
            "position": "Deputy",
            "region": "South",
            "assembly_id": ASSEMBLY_ID_1,
            "contact_info": json.dumps({"email": "john.smith@example.com", "phone": "+33 1 23 45 67 89"}),
        },
        {
            "id": OFFICIAL_ID_3,
            "first_name": "Marie",
            "last_name": "Curie",
            "party": "Green Party",
            "party_id": PARTY_ID_1,
            "position": "Senator",
            "region": "East",
            "assembly_id": ASSEMBLY_ID_2,
            "contact_info": None,
        },
    ]


def seed_all(provider):
    """Load every table of an in-memory provider with the rows above."""
    provider.seed_table("assembly", assembly_rows())
    provider.seed_table("political_party", party_rows())
    provider.seed_table("elected_official", official_rows())
    provider.seed_table("decision", decision_rows())
    provider.seed_table("individual_vote", vote_rows())
