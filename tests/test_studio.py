import pytest

from raiinet.link import Link
from raiinet.observer import Observer
from raiinet.studio import Studio


class _FakeGame:
    def __init__(self, cells, links):
        self.cells = cells
        self.links = {link.identifier: link for link in links}

    def state(self, row, col):
        return self.cells.get((row, col), ".")

    def link(self, link_id):
        return self.links[link_id]


class _Counter(Observer):
    def __init__(self):
        self.count = 0

    def notify(self):
        self.count += 1


def _studio():
    data = Link(True, 2, "a", revealed=True)
    virus = Link(False, 3, "B", revealed=True)
    hidden = Link(True, 1, "c")
    cells = {(0, 0): "a", (7, 1): "B", (0, 2): "c", (0, 3): "S", (1, 1): "+", (2, 2): "m", (3, 3): "w"}
    return Studio(_FakeGame(cells, [data, virus, hidden]))


def test_state_delegates_to_game():
    studio = _studio()
    assert studio.state(0, 0) == "a"
    assert studio.state(5, 5) == "."


def test_revealed_links_report_type():
    studio = _studio()
    assert studio.data_or_virus(0, 0) == "D"
    assert studio.data_or_virus(7, 1) == "V"


def test_hidden_link_is_unknown():
    assert _studio().data_or_virus(0, 2) == "U"


@pytest.mark.parametrize("cell", [(0, 3), (1, 1), (2, 2), (3, 3), (4, 4)])
def test_non_link_cells_are_unknown(cell):
    assert _studio().data_or_virus(*cell) == "U"


def test_render_notifies_observers():
    studio = _studio()
    counter = _Counter()
    studio.attach(counter)
    studio.render()
    assert counter.count == 1