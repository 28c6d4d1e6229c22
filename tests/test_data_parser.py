# -*- coding: utf-8 -*-

import pytest

from wave_picking.data_parser import InstanceParser, write_solution
from wave_picking.errors import InstanceFormatError
from wave_picking.model import Aisle, Instance, Order, Solution

EXAMPLE_FILE = """\
2 3 2
2 0 3 1 2
1 2 4
2 0 3 1 2
1 2 4
5 10
"""


@pytest.fixture
def instance_file(tmp_path):
    path = tmp_path / "instance_0001.txt"
    path.write_text(EXAMPLE_FILE)
    return path


def test_parse(instance_file, example_instance):
    instance = InstanceParser.parse(str(instance_file))
    assert instance == example_instance
    assert instance.orders[0].total_units == 5
    assert instance.num_orders == 2
    assert instance.num_aisles == 2


def test_parse_ignores_blank_lines():
    lines = EXAMPLE_FILE.splitlines()
    lines.insert(3, "   ")
    instance = InstanceParser.parse_lines([line for line in lines if line.strip()])
    assert instance.min_wave_size == 5


def test_missing_file():
    with pytest.raises(FileNotFoundError):
        InstanceParser.parse("/nao/existe/instance.txt")


@pytest.mark.parametrize("text", [
    "",
    "2 3\n",
    "2 3 2\n2 0 3 1 2\n",
    "2 3 2\n2 0 3 1\n1 2 4\n2 0 3 1 2\n1 2 4\n5 10\n",
    "2 3 2\n2 0 3 1 2\n1 2 4\n2 0 3 1 2\n1 2 4\n5\n",
    "2 3 2\n2 0 x 1 2\n1 2 4\n2 0 3 1 2\n1 2 4\n5 10\n",
    "1 1 1\n1 4 1\n1 0 1\n1 1\n",
    "1 1 1\n1 0 1\n1 0 1\n5 1\n",
])
def test_malformed_input(text):
    with pytest.raises(InstanceFormatError):
        InstanceParser.parse_lines(text.splitlines())


def test_format_error_is_a_value_error():
    with pytest.raises(ValueError):
        InstanceParser.parse_lines(["x"])


def test_write_solution(tmp_path):
    path = tmp_path / "solucao.txt"
    write_solution(Solution(orders={3, 1}, aisles={2}), str(path))
    assert path.read_text() == "2\n1\n3\n1\n2\n"


def test_instance_validation():
    with pytest.raises(InstanceFormatError):
        Instance(orders=(Order(id=1, items={0: 1}),), aisles=(), num_items=1,
                 min_wave_size=0, max_wave_size=1)
    with pytest.raises(InstanceFormatError):
        Instance.from_mappings(orders=[{0: 0}], aisles=[], num_items=1, min_wave_size=0, max_wave_size=1)
    with pytest.raises(InstanceFormatError):
        Instance.from_mappings(orders=[], aisles=[], num_items=1, min_wave_size=-1, max_wave_size=1)


def test_order_and_aisle_quantities_are_read_only():
    order = Order(id=0, items={0: 3, 1: 2})
    aisle = Aisle(id=0, inventory={0: 3})
    with pytest.raises(TypeError):
        order.items[0] = 9
    with pytest.raises(TypeError):
        aisle.inventory[1] = 4
    assert order.total_units == 5


def test_orders_and_instances_are_hashable(example_instance):
    assert hash(Order(id=0, items={0: 3})) == hash(Order(id=0, items={0: 3}))
    assert Order(id=0, items={0: 3}) == Order(id=0, items={0: 3})
    assert Order(id=0, items={0: 3}) != Order(id=0, items={1: 3})
    assert len({example_instance.orders[0], example_instance.orders[1]}) == 2
    hash(example_instance)


def test_caller_dict_does_not_leak_into_order():
    items = {0: 3}
    order = Order(id=0, items=items)
    items[0] = 9
    assert order.items[0] == 3
