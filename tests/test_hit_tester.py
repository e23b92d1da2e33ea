import unittest
from handstake.core.hit_tester import HitTester
from handstake.core.region_registry import RegionRegistry
from handstake.core.types import Rect, ScreenPoint


def fixed(rect):
    return lambda: rect


class TestHitTester(unittest.TestCase):
    def setUp(self):
        self.registry = RegionRegistry()
        self.tester = HitTester()

    def hit(self, x, y):
        return self.tester.hit_test(ScreenPoint(x, y), self.registry.snapshot())

    def test_miss_returns_none(self):
        self.registry.register("a", fixed(Rect(0, 0, 10, 10)))
        self.assertIsNone(self.hit(50, 50))

    def test_edges_are_inside(self):
        self.registry.register("a", fixed(Rect(0, 0, 10, 10)))
        self.assertEqual(self.hit(10, 10), "a")
        self.assertEqual(self.hit(0, 0), "a")

    def test_overlap_resolves_to_first_registered(self):
        self.registry.register("A", fixed(Rect(0, 0, 100, 100)))
        self.registry.register("B", fixed(Rect(50, 50, 150, 150)))
        self.assertEqual(self.hit(75, 75), "A")
        # Stable across calls
        self.assertEqual(self.hit(75, 75), "A")
        self.assertEqual(self.hit(120, 120), "B")

    def test_priority_beats_registration_order(self):
        self.registry.register("area", fixed(Rect(0, 0, 100, 100)))
        self.registry.register("button", fixed(Rect(10, 10, 20, 20)), priority=10)
        self.assertEqual(self.hit(15, 15), "button")
        self.assertEqual(self.hit(50, 50), "area")

    def test_unavailable_bounds_are_not_hit(self):
        """A region that is momentarily not laid out falls through to the next one."""
        self.registry.register("ghost", lambda: None)
        self.registry.register("solid", fixed(Rect(0, 0, 10, 10)))
        self.assertEqual(self.hit(5, 5), "solid")

    def test_bounds_are_queried_live(self):
        box = {"rect": Rect(0, 0, 10, 10)}
        self.registry.register("moving", lambda: box["rect"])
        self.assertEqual(self.hit(5, 5), "moving")
        box["rect"] = Rect(100, 100, 110, 110)
        self.assertIsNone(self.hit(5, 5))
        self.assertEqual(self.hit(105, 105), "moving")


class TestRegionRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = RegionRegistry()

    def test_unregister(self):
        self.registry.register("a", fixed(Rect(0, 0, 1, 1)))
        self.registry.unregister("a")
        self.assertNotIn("a", self.registry)
        self.assertEqual(len(self.registry), 0)
        # Unknown ids are ignored
        self.registry.unregister("nope")

    def test_reregister_keeps_position(self):
        self.registry.register("a", fixed(Rect(0, 0, 1, 1)))
        self.registry.register("b", fixed(Rect(0, 0, 1, 1)))
        self.registry.register("a", fixed(Rect(5, 5, 6, 6)))
        self.assertEqual(self.registry.ids(), ["a", "b"])
        self.assertEqual(self.registry.snapshot()[0].bounds_provider(), Rect(5, 5, 6, 6))

    def test_reregister_after_unregister_goes_last(self):
        self.registry.register("a", fixed(Rect(0, 0, 1, 1)))
        self.registry.register("b", fixed(Rect(0, 0, 1, 1)))
        self.registry.unregister("a")
        self.registry.register("a", fixed(Rect(0, 0, 1, 1)))
        self.assertEqual(self.registry.ids(), ["b", "a"])


if __name__ == '__main__':
    unittest.main()
