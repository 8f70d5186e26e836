"""
Fake person generator - synthetic records for seeding the persons index.
No I/O; ids are always fresh uuid4 values, names and emails come from `rng`.
"""

import random
import uuid

from person_search.schemas.person import Person

FIRST_NAMES = [
    "James", "Mary", "Robert", "Patricia", "John", "Jennifer", "Michael", "Linda",
    "David", "Elizabeth", "William", "Barbara", "Richard", "Susan", "Joseph", "Jessica",
    "Thomas", "Sarah", "Charles", "Karen", "Christopher", "Lisa", "Daniel", "Nancy",
    "Matthew", "Betty", "Anthony", "Margaret", "Mark", "Sandra", "Donald", "Ashley",
    "Steven", "Kimberly", "Andrew", "Emily", "Paul", "Donna", "Joshua", "Michelle",
    "Kenneth", "Carol", "Kevin", "Amanda", "Brian", "Melissa", "George", "Deborah",
]

LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez", "Wilson", "Anderson",
    "Thomas", "Taylor", "Moore", "Jackson", "Martin", "Lee", "Perez", "Thompson",
    "White", "Harris", "Sanchez", "Clark", "Ramirez", "Lewis", "Robinson", "Walker",
    "Young", "Allen", "King", "Wright", "Scott", "Torres", "Nguyen", "Hill", "Flores",
]

EMAIL_DOMAINS = ["gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "example.com"]


def random_email(first_name: str, last_name: str, rng: random.Random) -> str:
    separator = rng.choice([".", "_", ""])
    suffix = str(rng.randint(1, 99)) if rng.random() > 0.5 else ""
    local = f"{first_name}{separator}{last_name}{suffix}".lower()
    return f"{local}@{rng.choice(EMAIL_DOMAINS)}"


def generate_person(rng: random.Random | None = None) -> Person:
    rng = rng or random.Random()
    first_name = rng.choice(FIRST_NAMES)
    last_name = rng.choice(LAST_NAMES)
    return Person(
        id=uuid.uuid4(),
        first_name=first_name,
        last_name=last_name,
        email=random_email(first_name, last_name, rng),
    )


def generate_persons(count: int, rng: random.Random | None = None) -> list[Person]:
    """Generate `count` fake persons (none for count <= 0). Pass a seeded `rng` for reproducible names."""
    rng = rng or random.Random()
    return [generate_person(rng) for _ in range(count)]
