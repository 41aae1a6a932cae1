"""Demo data for local development."""

import logging

from lostpet.core.passwords import PasswordHasher
from lostpet.repositories.memory import InMemoryStore
from lostpet.schemas.pet import PetPayload
from lostpet.services.pets import PetService

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password"

_DEMO_USERS = (
    ("john@doe.org", "Doe", "John"),
    ("jane@doe.org", "Doe", "Jane"),
)

# (owner index, pet)
_DEMO_PETS = (
    (0, PetPayload(name="Médor", breed="Labrador", sexe="male", birthdate="01/01/2019")),
    (0, PetPayload(name="Pyla", breed="Beagle", sexe="female", birthdate="06/01/2020")),
    (1, PetPayload(name="Brutus", breed="Caniche", sexe="male", birthdate="12/04/2022")),
    (0, PetPayload(name="Pluto", breed="Yorkshire", sexe="male", birthdate="09/04/2023")),
)


def seed_demo_data(store: InMemoryStore, hasher: PasswordHasher, pets: PetService) -> bool:
    """Populate an almost-empty store; returns False when there is already data."""
    if len(store.users) >= 2:
        return False

    logger.info("seed.started users=%d pets=%d", len(_DEMO_USERS), len(_DEMO_PETS))
    owners = [
        store.create_user(
            email=email,
            password_hash=hasher.hash(DEMO_PASSWORD),
            name=name,
            firstname=firstname,
        )
        for email, name, firstname in _DEMO_USERS
    ]
    for owner_index, payload in _DEMO_PETS:
        pets.create_pet(owner_id=owners[owner_index].id, payload=payload)
    return True
