"""Generate synthetic hospitality lead records."""

import re
from typing import Dict, List, Optional
import numpy as np
from faker import Faker


LeadRecord = Dict[str, Optional[str]]

# Districts and towns covered by the dataset, with their PIN code prefixes
TARGET_AREAS = {
    "Agartala": "7990",
    "Udaipur": "7991",
    "Dharmanagar": "7992",
    "Kailashahar": "7992",
    "Belonia": "7991",
    "Ambassa": "7992",
    "Khowai": "7992",
    "Teliamura": "7992",
    "Sabroom": "7991",
    "Kamalpur": "7992",
}

BUSINESS_KINDS = [
    "Hotel", "Residency", "Homestay", "Guest House", "Lodge", "Resort",
    "Restaurant", "Cafe", "Dhaba", "Inn", "Banquet Hall", "Eco Retreat",
]

NAME_PREFIXES = [
    "Royal", "Heritage", "Green Valley", "Neermahal", "Ujjayanta", "Unakoti",
    "Jampui Hills", "Rudrasagar", "Sepahijala", "Tripura Sundari", "Lake View",
    "Bamboo Grove", "Orchid", "Sunrise", "Pineapple", "Gomati", "Hilltop",
]

LOCALITIES = [
    "Airport Road", "Banamalipur", "Krishnanagar", "Ramnagar", "Battala",
    "Jagannath Bari Road", "Hawkers Corner", "Post Office Chowmuhani",
    "Motor Stand", "College Tilla", "Melarmath", "Dhaleswar", "Abhoynagar",
]

# Fields that may be blank in the source data
OPTIONAL_FIELDS = ["Business No.", "Instagram", "LinkedIn", "Website"]


def slugify(name: str) -> str:
    """Lowercase a business name into a dash-separated slug."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def generate_business_name(rng: np.random.Generator, fake: Faker) -> str:
    """Build a business name like 'Lake View Homestay' or 'Debbarma Residency'."""
    kind = str(rng.choice(BUSINESS_KINDS))
    roll = rng.random()
    if roll < 0.4:
        return f"{rng.choice(NAME_PREFIXES)} {kind}"
    elif roll < 0.7:
        return f"{fake.last_name()} {kind}"
    else:
        return f"The {rng.choice(NAME_PREFIXES)} {fake.last_name()} {kind}"


def generate_address(area: str, rng: np.random.Generator, fake: Faker) -> str:
    """Street address inside a target area, ending with its PIN code."""
    pin = f"{TARGET_AREAS[area]}{int(rng.integers(10, 99)):02d}"
    parts = [
        f"{int(rng.integers(1, 250))}, {rng.choice(LOCALITIES)}",
    ]
    # Some addresses carry a landmark, which makes them wrap
    if rng.random() < 0.35:
        landmark = rng.choice(["School", "Hospital", "Park", "Temple"])
        parts.append(f"Near {fake.last_name()} Memorial {landmark}")
    parts.append(f"{area}, Tripura {pin}, India")
    return ", ".join(parts)


def generate_lead(rng: np.random.Generator, fake: Faker, missing_rate: float = 0.03) -> LeadRecord:
    """Generate a single lead record."""
    area = str(rng.choice(list(TARGET_AREAS)))
    name = generate_business_name(rng, fake)
    slug = slugify(name)

    lead: LeadRecord = {
        "Name": name,
        "Full Address": generate_address(area, rng, fake),
        "Business No.": f"0381-2{int(rng.integers(100000, 999999))}",
        "Mobile": f"+91 {int(rng.choice([6, 7, 8, 9]))}{int(rng.integers(100000000, 999999999))}",
        "Instagram": f"@{slug.replace('-', '_')}",
        "LinkedIn": f"linkedin.com/company/{slug}",
        "Website": f"www.{slug.replace('-', '')}.in",
        "Target Area": area,
    }

    for key in OPTIONAL_FIELDS:
        if rng.random() < missing_rate:
            lead[key] = None

    return lead


def generate_leads(
    count: int,
    rng: np.random.Generator,
    fake: Optional[Faker] = None,
    missing_rate: float = 0.03,
) -> List[LeadRecord]:
    """
    Generate count lead records.

    The same seed always produces the same records: the Faker instance is
    seeded from rng when one is not supplied.
    """
    if fake is None:
        fake = Faker("en_IN")
        fake.seed_instance(int(rng.integers(0, 2**31)))

    return [generate_lead(rng, fake, missing_rate) for _ in range(count)]
