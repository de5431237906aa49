import unittest

from _support import make_snapshot

from gopher.core.actions import SortKey
from gopher.core.sorting import Comparator, compare_names, sort_snapshot


def _sample():
    return make_snapshot("/d", [
        ("..", "dir", 4096, 0),
        ("b.txt", "file", 100, 1000),
        ("a.txt", "file", 50, 2000),
    ])


class ComparatorTests(unittest.TestCase):
    def test_selecting_active_key_flips_direction(self):
        comparator = Comparator()
        self.assertEqual(comparator.select(SortKey.NAME), Comparator(SortKey.NAME, True))
        self.assertEqual(comparator.select(SortKey.NAME).select(SortKey.NAME), Comparator(SortKey.NAME, False))

    def test_selecting_other_key_starts_ascending(self):
        comparator = Comparator(SortKey.NAME, True)
        self.assertEqual(comparator.select(SortKey.DATE), Comparator(SortKey.DATE, False))
        self.assertEqual(comparator.select("size"), Comparator(SortKey.SIZE, False))

    def test_descending_is_negated_ascending(self):
        snapshot = _sample()
        a, b = snapshot[1], snapshot[2]
        for key in SortKey:
            asc = Comparator(key)
            desc = Comparator(key, True)
            self.assertEqual(desc.compare(a, b), -asc.compare(a, b))
            self.assertEqual(desc.compare(a, a), 0)

    def test_name_comparison_ignores_case(self):
        snapshot = make_snapshot("/d", [("Zeta", "file", 0, 0), ("alpha", "file", 0, 0)])
        self.assertGreater(compare_names(snapshot[0], snapshot[1]), 0)

    def test_label(self):
        self.assertEqual(Comparator(SortKey.SIZE, True).label, "size desc")


class SortSnapshotTests(unittest.TestCase):
    def test_parent_stays_pinned(self):
        snapshot = make_snapshot("/d", [
            ("zz", "file", 1, 1),
            ("..", "dir", 99999, 9),
            ("aa", "file", 2, 2),
            ("mm", "file", 3, 3),
        ])
        for key in SortKey:
            for descending in (False, True):
                comparator = Comparator(key, descending)
                sort_snapshot(snapshot, comparator)
                self.assertEqual(snapshot[0].name, "..")
                rest = snapshot.entries[1:]
                for left, right in zip(rest, rest[1:]):
                    self.assertLessEqual(comparator.compare(left, right), 0)

    def test_same_key_twice_reverses(self):
        snapshot = make_snapshot("/d", [
            ("..", "dir", 0, 0),
            ("c", "file", 3, 0),
            ("a", "file", 1, 0),
            ("b", "file", 2, 0),
        ])
        once = Comparator().select(SortKey.SIZE)
        sort_snapshot(snapshot, once)
        ascending = snapshot.names()
        sort_snapshot(snapshot, once.select(SortKey.SIZE))
        self.assertEqual(snapshot.names(), ascending[:1] + ascending[:0:-1])

    def test_short_snapshots_are_left_alone(self):
        snapshot = make_snapshot("/d", [("..", "dir", 0, 0), ("only", "file", 0, 0)])
        self.assertIs(sort_snapshot(snapshot, Comparator(SortKey.NAME, True)), snapshot)
        self.assertEqual(snapshot.names(), ["..", "only"])

    def test_name_size_then_name_again(self):
        snapshot = _sample()
        name_asc = Comparator(SortKey.NAME)
        sort_snapshot(snapshot, name_asc)
        self.assertEqual(snapshot.names(), ["..", "a.txt", "b.txt"])

        size_asc = name_asc.select(SortKey.SIZE)
        sort_snapshot(snapshot, size_asc)
        self.assertEqual(snapshot.names(), ["..", "a.txt", "b.txt"])

        name_desc = size_asc.select(SortKey.NAME).select(SortKey.NAME)
        sort_snapshot(snapshot, name_desc)
        self.assertEqual(snapshot.names(), ["..", "b.txt", "a.txt"])


if __name__ == "__main__":
    unittest.main()
