#!/usr/bin/env python3
"""
Person/Address example records

Two small frozen records used by the demos:
    Person(name, address) -> Address(street)
"""

import sys
import os
from dataclasses import dataclass

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from bound_lens import lensed


@lensed
@dataclass(frozen=True)
class Person:
    name: str
    address: 'Address'

    def __str__(self) -> str:
        return f"{self.name} from {self.address}"


@lensed
@dataclass(frozen=True)
class Address:
    street: str

    def __str__(self) -> str:
        return self.street


def seed_person() -> Person:
    return Person(name="Maciej Konieczny", address=Address(street="Sesame Street"))


if __name__ == "__main__":
    narf = seed_person()
    family_narf = Person.Lenses.name.set("Kuba", narf)

    print(family_narf)
    print(narf.through_lens.name.get())
    print(narf.through_lens.name.set("narf"))
    print(narf.through_lens.address.street.set("Baker Street"))
    print(narf.address.through_lens.street.set("Baker Street"))
