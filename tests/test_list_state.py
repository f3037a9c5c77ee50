from __future__ import annotations

import unittest

from sentiment_dashboard.core.list_state import (
    ListAction,
    ListState,
    derive_state,
    list_reducer,
)


class ListReducerTest(unittest.TestCase):
    def test_loading_keeps_data_and_clears_error(self):
        state = ListState(data=[1, 2], loading=False, error="boom")
        next_state = list_reducer(state, ListAction.loading())

        self.assertTrue(next_state.loading)
        self.assertIsNone(next_state.error)
        self.assertEqual(next_state.data, [1, 2])
        self.assertEqual(next_state.phase, "loading")

    def test_success_replaces_data(self):
        state = ListState(data=[1], loading=True)
        next_state = list_reducer(state, ListAction.success([3, 4]))

        self.assertEqual(next_state.data, [3, 4])
        self.assertFalse(next_state.loading)
        self.assertIsNone(next_state.error)
        self.assertEqual(next_state.phase, "success")

    def test_error_keeps_last_known_good_data(self):
        state = ListState(data=["a"], loading=True)
        next_state = list_reducer(state, ListAction.failure("network down"))

        self.assertEqual(next_state.data, ["a"])
        self.assertFalse(next_state.loading)
        self.assertEqual(next_state.error, "network down")
        self.assertEqual(next_state.phase, "error")

    def test_reducer_does_not_mutate_input(self):
        state = ListState(data=[1], loading=False)
        list_reducer(state, ListAction.success([2]))
        self.assertEqual(state.data, [1])
        self.assertFalse(state.loading)

    def test_initial_state_is_loading(self):
        state = ListState.initial()
        self.assertEqual(state.data, [])
        self.assertTrue(state.loading)
        self.assertIsNone(state.error)

    def test_derived_state_inherits_flags(self):
        source = ListState(data=[1], loading=False, error="stale")
        derived = derive_state(source, ["x"])
        self.assertEqual(derived.data, ["x"])
        self.assertEqual(derived.error, "stale")
        self.assertFalse(derived.loading)


if __name__ == "__main__":
    unittest.main()
