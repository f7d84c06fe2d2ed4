"""Patient records consumed by the generator.

The generator never invents demographics itself: it receives a Person and
only asks it for identity fields and a date during its lifetime.
PersonFactory exists so the command line tool has someone to scan.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from datetime import date, timedelta

FORENAMES = [
    "Alistair", "Fiona", "Callum", "Isla", "Euan", "Morag", "Hamish",
    "Eilidh", "Duncan", "Catriona", "Fraser", "Kirsty", "Angus", "Mhairi",
]
SURNAMES = [
    "MacDonald", "Campbell", "Stewart", "Robertson", "Fraser", "Murray",
    "Reid", "Ross", "Paterson", "Sinclair", "Ferguson", "Munro",
]
STREETS = ["High Street", "Station Road", "Main Street", "Church Lane", "Mill Brae"]
TOWNS = ["Dundee", "Perth", "Arbroath", "Forfar", "Montrose", "Crieff"]


@dataclass(frozen=True)
class Address:
    """Postal address of a patient."""

    line1: str
    line2: str = ""
    line3: str = ""
    line4: str = ""
    postcode: str = ""

    def as_line(self) -> str:
        """Return the address as a single space separated line."""
        parts = [self.line1, self.line2, self.line3, self.line4, self.postcode]
        return " ".join(part for part in parts if part)


@dataclass(frozen=True)
class Person:
    """A (fake) patient.

    Attributes:
        patient_id: CHI-style identifier, used as PatientID
        forename: Given name
        surname: Family name
        date_of_birth: Date of birth
        date_of_death: Date of death, None while alive
        address: Postal address

    """

    patient_id: str
    forename: str
    surname: str
    date_of_birth: date
    date_of_death: date | None = None
    address: Address = field(default_factory=lambda: Address(line1=""))

    @property
    def full_name(self) -> str:
        return f"{self.forename} {self.surname}"

    def random_date_during_lifetime(
        self, rng: random.Random, today: date | None = None
    ) -> date:
        """Draw a uniform date between birth and death (or today).

        Args:
            rng: Shared random generator
            today: Upper bound for the living, defaults to date.today()

        Returns:
            A date within the person's lifetime

        """
        end = self.date_of_death or today or date.today()
        span = max(0, (end - self.date_of_birth).days)
        return self.date_of_birth + timedelta(days=rng.randint(0, span))


class PersonFactory:
    """Fixture-grade people for driving the generator from the command line."""

    def __init__(self, rng: random.Random, today: date | None = None):
        self.rng = rng
        self.today = today or date.today()

    def create(self) -> Person:
        """Create one person aged between 0 and 95."""
        dob = self.today - timedelta(days=self.rng.randint(0, 95 * 365))
        chi = dob.strftime("%d%m%y") + f"{self.rng.randint(0, 9999):04d}"
        address = Address(
            line1=f"{self.rng.randint(1, 250)} {self.rng.choice(STREETS)}",
            line2=self.rng.choice(TOWNS),
            postcode=f"DD{self.rng.randint(1, 11)} {self.rng.randint(1, 9)}"
            f"{self.rng.choice('ABDEFGHJLNPQRSTUWXYZ')}"
            f"{self.rng.choice('ABDEFGHJLNPQRSTUWXYZ')}",
        )
        return Person(
            patient_id=chi,
            forename=self.rng.choice(FORENAMES),
            surname=self.rng.choice(SURNAMES),
            date_of_birth=dob,
            address=address,
        )
