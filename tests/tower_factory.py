"""Small hand-built towers shared by the engine tests."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.building import Block, Floor, Tower
from models.unit import Unit


def make_unit(unit_id, floor_id, floor_number, number=None, code=None, design_id=None):
    return Unit(unit_id, floor_id, floor_number, number, code, design_id)


def make_floor(floor_id, block_id, number, units, code=None):
    return Floor(floor_id, block_id, number, code or str(number), units)


def make_tower():
    """Block A: floors 1-4 with floor-prefixed numbers and one coded unit.
    Block B: floors 1-2, a bare "99" and a coded unit.

    Unit ids never coincide with unit numbers.
    """
    block_a = Block(10, "A", tower_id=1, floors=[
        make_floor(100, 10, 1, [
            make_unit(1, 100, 1, "101"),
            make_unit(2, 100, 1, "102"),
            make_unit(3, 100, 1, "103"),
        ]),
        make_floor(101, 10, 2, [
            make_unit(4, 101, 2, "201"),
            make_unit(5, 101, 2, "202"),
        ]),
        make_floor(102, 10, 3, [
            make_unit(6, 102, 3, "301"),
        ]),
        make_floor(103, 10, 4, [
            make_unit(7, 103, 4, code="A-4-08"),
        ]),
    ])
    block_b = Block(20, "B", tower_id=1, floors=[
        make_floor(200, 20, 1, [
            make_unit(8, 200, 1, "99"),
        ]),
        make_floor(201, 20, 2, [
            make_unit(9, 201, 2, code="B-2-01"),
        ]),
    ])
    return Tower(1, "Test Tower", [block_a, block_b])


def make_block(block_id, label, floor_codes, units_per_floor=2, first_unit_id=1000):
    """A block whose floors carry floor-prefixed unit numbers ("101", "102", ...)."""
    floors = []
    unit_id = first_unit_id
    for i, code in enumerate(floor_codes):
        floor_id = block_id * 100 + i
        number = int(code) if code.isdigit() else 0
        units = []
        for n in range(1, units_per_floor + 1):
            units.append(make_unit(unit_id, floor_id, number, f"{number}{n:02d}"))
            unit_id += 1
        floors.append(make_floor(floor_id, block_id, number, units, code=code))
    return Block(block_id, label, tower_id=1, floors=floors)
