"""Realistic sample feedback used to seed an officer's empty inbox."""

from __future__ import annotations

import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional
from uuid import UUID

from ..models import Outcome, Record


@dataclass(frozen=True)
class QuestionTemplate:
    category: str
    section: str
    question: str
    message: str


QUESTION_BANK: List[QuestionTemplate] = [
    QuestionTemplate(
        "Master Plan",
        "Land Use Zoning",
        "Why was the plot near my home rezoned?",
        "I noticed the empty plot beside my block has been rezoned from reserve site to residential. When was this decided and will there be a public consultation?",
    ),
    QuestionTemplate(
        "Master Plan",
        "Land Use Zoning",
        "What will the white site in my estate be used for?",
        "There is a white site marked near the MRT station in my estate. Can you share what kind of development is planned there and when it will start?",
    ),
    QuestionTemplate(
        "Master Plan",
        "Building Height Controls",
        "Why are taller blocks allowed next to landed housing?",
        "A developer is building a 30-storey condominium right next to our landed estate. I thought there were height limits here. How was this approved?",
    ),
    QuestionTemplate(
        "Greenery",
        "Parks and Nature Areas",
        "Will the forest patch behind my estate be cleared?",
        "The forest behind our neighbourhood is home to many birds and monkeys. I heard it will be cleared for housing. Is this true and can it be kept as a park?",
    ),
    QuestionTemplate(
        "Greenery",
        "Park Connectors",
        "When will the park connector be extended to my area?",
        "I cycle to work every day and the park connector stops two kilometres short of my estate. Are there plans to extend it?",
    ),
    QuestionTemplate(
        "Transport",
        "Roads and Connectivity",
        "Why is a new road being built through the nature area?",
        "I saw survey works for a new road cutting through the green belt near my home. What is the road for and was an environmental study done?",
    ),
    QuestionTemplate(
        "Transport",
        "Cycling",
        "Can more bicycle parking be provided at the MRT station?",
        "The bicycle racks at my MRT station are always full by 8am and people park along the walkway. Can more racks be added?",
    ),
    QuestionTemplate(
        "Heritage",
        "Conservation",
        "Is the old market building going to be conserved?",
        "The old wet market in my town has been around since the 1970s and holds many memories. Will it be conserved or demolished?",
    ),
    QuestionTemplate(
        "Heritage",
        "Conservation",
        "Can I renovate my conserved shophouse?",
        "I own a conserved shophouse and want to add a rear extension. What guidelines apply and who do I submit plans to?",
    ),
    QuestionTemplate(
        "Development Control",
        "Change of Use",
        "Can I run a home-based business from my flat?",
        "I would like to run a small baking business from home. Do I need planning permission and what are the conditions?",
    ),
    QuestionTemplate(
        "Development Control",
        "Change of Use",
        "Why is a commercial school operating in a residential unit?",
        "A tuition centre is operating from a ground floor unit in my condominium and the noise and crowd are disturbing residents. Is this allowed?",
    ),
    QuestionTemplate(
        "Amenities",
        "Community Facilities",
        "When will the new community club be completed?",
        "We were told a new community club would be built in our estate. Construction seems to have stopped. When will it be ready?",
    ),
    QuestionTemplate(
        "Amenities",
        "Sports Facilities",
        "Will the stadium redevelopment keep the public running track?",
        "I run at the stadium track every morning. With the redevelopment plans, will there still be a public running track?",
    ),
    QuestionTemplate(
        "Housing",
        "New Estates",
        "How many new flats will be built in the new town?",
        "I am planning to apply for a flat. Can you share how many homes are planned in the new town and when the first launches will be?",
    ),
    QuestionTemplate(
        "Economy",
        "Business Districts",
        "What is happening to the offices being moved out of the city centre?",
        "My company is relocating to a regional centre. What amenities and transport links will be there to support workers?",
    ),
    QuestionTemplate(
        "Online Services",
        "Planning Information",
        "Where can I check the planning parameters for my property?",
        "I want to find out the allowable plot ratio and height for my house before I rebuild. Where can I look this up online?",
    ),
]

# Planning area: (latitude, longitude) of its centre
PLANNING_AREAS = {
    "Ang Mo Kio": (1.3691, 103.8454),
    "Bedok": (1.3236, 103.9273),
    "Bishan": (1.3526, 103.8352),
    "Bukit Timah": (1.3294, 103.8021),
    "Clementi": (1.3162, 103.7649),
    "Jurong East": (1.3329, 103.7436),
    "Outram": (1.2803, 103.8395),
    "Punggol": (1.3984, 103.9072),
    "Queenstown": (1.2942, 103.7861),
    "Sengkang": (1.3868, 103.8914),
    "Tampines": (1.3496, 103.9568),
    "Toa Payoh": (1.3343, 103.8563),
    "Woodlands": (1.4382, 103.7890),
    "Yishun": (1.4304, 103.8354),
}

CHANNELS = ["Email", "Online Form", "Phone", "Letter", "Walk-in"]
CASE_TYPES = ["Enquiry", "Feedback", "Complaint", "Appeal", "Suggestion"]
STREETS = ["Avenue 1", "Avenue 3", "Street 21", "Central", "Drive", "Road", "Link"]


def _location(rng: random.Random) -> tuple:
    area = rng.choice(list(PLANNING_AREAS))
    lat, lng = PLANNING_AREAS[area]
    lat += rng.uniform(-0.012, 0.012)
    lng += rng.uniform(-0.012, 0.012)
    block = rng.randint(1, 999)
    return area, f"Blk {block} {area} {rng.choice(STREETS)}", round(lat, 6), round(lng, 6)


def generate_sample_records(
    officer_id: UUID,
    count: int,
    *,
    rng: Optional[random.Random] = None,
    now: Optional[datetime] = None,
) -> List[Record]:
    """Build ``count`` unsaved Open records for ``officer_id``, newest first."""
    rng = rng or random.Random()
    now = now or datetime.now(timezone.utc)

    records = []
    for _ in range(count):
        template = rng.choice(QUESTION_BANK)
        area, address, lat, lng = _location(rng)
        received = now - timedelta(days=rng.uniform(0, 14))
        records.append(
            Record(
                message=template.message,
                section_code=template.section,
                action_officer_1=officer_id,
                creation_officer="System",
                case_type=rng.choice(CASE_TYPES),
                channel=rng.choice(CHANNELS),
                category=template.category,
                subcategory=template.section,
                outcome=Outcome.OPEN.value,
                planning_area=area,
                location=address,
                location_x=str(lat),
                location_y=str(lng),
                receive_date=received,
                creation_date=min(received + timedelta(minutes=rng.randint(1, 90)), now),
                relevant_chunks=[],
                related_emails=[],
                evergreen_topics=[],
            )
        )

    records.sort(key=lambda r: r.creation_date, reverse=True)
    return records
