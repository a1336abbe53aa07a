from collections import Counter

import numpy as np
import pytest

from derbysim.simulation.roster import RosterGenerator
from derbysim.simulation.schedule import ScheduleGenerator
from derbysim.simulation.selector import RoundSelector


@pytest.fixture
def roster():
    return RosterGenerator(rng=np.random.default_rng(3)).generate(20)


class TestRoundSelector:
    def test_selects_k_distinct_ids(self, roster):
        selected = RoundSelector(rng=np.random.default_rng(5)).select(roster, 10)

        assert len(selected) == 10
        assert len(set(selected)) == 10
        assert set(selected) <= set(roster)
        assert all(type(cid) is int for cid in selected)

    def test_select_whole_pool(self, roster):
        selected = RoundSelector(rng=np.random.default_rng(5)).select(roster, 20)

        assert sorted(selected) == list(range(1, 21))

    def test_select_none(self, roster):
        assert RoundSelector().select(roster, 0) == []

    @pytest.mark.parametrize("k", [-1, 21])
    def test_invalid_k_rejected(self, roster, k):
        with pytest.raises(ValueError):
            RoundSelector().select(roster, k)

    def test_selection_is_roughly_uniform(self, roster):
        selector = RoundSelector(rng=np.random.default_rng(11))
        small_pool = {cid: roster[cid] for cid in (1, 2, 3, 4)}

        counts = Counter(selector.select(small_pool, 1)[0] for _ in range(2000))

        assert set(counts) == {1, 2, 3, 4}
        assert all(400 < count < 600 for count in counts.values())


class TestScheduleGenerator:
    def test_default_schedule(self):
        assert ScheduleGenerator().generate() == [1200, 1400, 1600, 1800, 2000, 2200]

    def test_schedule_is_constant(self):
        generator = ScheduleGenerator([1000, 2000])
        first = generator.generate()
        first.append(5000)

        assert generator.generate() == [1000, 2000]

    def test_not_ascending_rejected(self):
        with pytest.raises(ValueError):
            ScheduleGenerator([1200, 1200, 1400])
