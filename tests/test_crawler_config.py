from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from sentiment_dashboard.core.errors import ConfigStoreError
from sentiment_dashboard.modules.crawler_config.editing import (
    add_item,
    admin_status_reducer,
    clean_config,
    clean_item,
    diff_config,
    filter_items,
    is_edited,
    is_new,
    parse_subreddits,
    remove_item,
    replace_item,
)
from sentiment_dashboard.modules.crawler_config.schemas import (
    AdminStatus,
    AdminStatusAction,
    CrawlerConfig,
    RedditKeywordItem,
    SteamKeywordItem,
)
from sentiment_dashboard.modules.crawler_config.store import (
    CrawlerConfigStore,
    parse_config_text,
)


def _config() -> CrawlerConfig:
    return CrawlerConfig.model_validate(
        {
            "source": {
                "reddit": [
                    {"keyword": "elden ring", "subreddits": ["Eldenring"], "post_limit": 10},
                    {"keyword": "hades"},
                ],
                "steam": [{"keyword": "balatro", "sort": "created"}],
            }
        }
    )


class CleaningTest(unittest.TestCase):
    def test_defaults_and_blanks_are_dropped(self):
        item = RedditKeywordItem(
            keyword="hades",
            subreddits=[],
            time_filter="day",
            sort="top",
            post_limit=6,
            top_comments_limit=5,
        )
        self.assertEqual(clean_item(item), {"keyword": "hades", "top_comments_limit": 5})

    def test_steam_defaults_differ_from_reddit(self):
        self.assertEqual(
            clean_item(SteamKeywordItem(keyword="balatro", post_limit=6)),
            {"keyword": "balatro", "post_limit": 6},
        )
        self.assertEqual(
            clean_item(SteamKeywordItem(keyword="balatro", post_limit=8)),
            {"keyword": "balatro"},
        )

    def test_clean_config_drops_keywordless_items_and_empty_sources(self):
        config = CrawlerConfig.model_validate(
            {"source": {"reddit": [{"keyword": ""}], "steam": [{"keyword": "dota"}]}}
        )
        self.assertEqual(clean_config(config), {"source": {"steam": [{"keyword": "dota"}]}})

    def test_parse_subreddits(self):
        self.assertEqual(parse_subreddits(" gaming, ,pcgaming ,"), ["gaming", "pcgaming"])
        self.assertIsNone(parse_subreddits("  , "))


class DiffTest(unittest.TestCase):
    def test_new_and_edited_markers(self):
        baseline = _config().items("reddit")
        self.assertTrue(is_new(RedditKeywordItem(keyword="celeste"), baseline))
        self.assertFalse(is_new(RedditKeywordItem(keyword="hades"), baseline))
        self.assertTrue(is_edited(RedditKeywordItem(keyword="hades", post_limit=3), baseline))
        # Setting a value equal to the default is not an edit.
        self.assertFalse(is_edited(RedditKeywordItem(keyword="hades", post_limit=6), baseline))

    def test_diff_config_reports_per_source_changes(self):
        baseline = _config()
        edited = add_item(baseline, "reddit", RedditKeywordItem(keyword="celeste"))
        edited = replace_item(edited, "steam", 0, SteamKeywordItem(keyword="balatro"))
        edited = remove_item(edited, "reddit", 2)

        diff = diff_config(baseline, edited)

        self.assertEqual(diff.added, {"reddit": ["celeste"]})
        self.assertEqual(diff.removed, {"reddit": ["hades"]})
        self.assertEqual(diff.edited, {"steam": ["balatro"]})
        self.assertFalse(diff.is_empty)
        self.assertTrue(diff_config(baseline, baseline).is_empty)


class ListEditingTest(unittest.TestCase):
    def test_add_item_prepends_without_mutating(self):
        config = _config()
        updated = add_item(config, "steam", SteamKeywordItem(keyword="hollow knight"))

        self.assertEqual(
            [item.keyword for item in updated.items("steam")],
            ["hollow knight", "balatro"],
        )
        self.assertEqual(len(config.items("steam")), 1)

    def test_add_item_rejects_wrong_source_or_blank_keyword(self):
        with self.assertRaises(ValueError):
            add_item(_config(), "reddit", SteamKeywordItem(keyword="x"))
        with self.assertRaises(ValueError):
            add_item(_config(), "reddit", RedditKeywordItem(keyword="  "))

    def test_bad_index(self):
        with self.assertRaises(IndexError):
            remove_item(_config(), "steam", 3)
        with self.assertRaises(IndexError):
            replace_item(_config(), "reddit", -1, RedditKeywordItem(keyword="x"))

    def test_filter_keeps_original_positions(self):
        items = _config().items("reddit")
        self.assertEqual(
            [(index, item.keyword) for index, item in filter_items(items, "HAD")],
            [(1, "hades")],
        )
        self.assertEqual(len(filter_items(items, "")), 2)


class AdminStatusReducerTest(unittest.TestCase):
    def test_save_cycle(self):
        state = admin_status_reducer(AdminStatus(), AdminStatusAction(type="LOADING"))
        self.assertTrue(state.loading)
        state = admin_status_reducer(state, AdminStatusAction(type="LOADED"))
        self.assertFalse(state.loading)
        state = admin_status_reducer(state, AdminStatusAction(type="SAVING"))
        self.assertTrue(state.saving)
        state = admin_status_reducer(state, AdminStatusAction(type="SAVED"))
        self.assertEqual(state, AdminStatus(success=True))

    def test_error_and_reset(self):
        state = admin_status_reducer(
            AdminStatus(saving=True), AdminStatusAction(type="ERROR", error="disk full")
        )
        self.assertEqual(state.error, "disk full")
        self.assertFalse(state.saving)
        self.assertEqual(
            admin_status_reducer(state, AdminStatusAction(type="RESET")), AdminStatus()
        )


class CrawlerConfigStoreTest(unittest.TestCase):
    def test_missing_file_reads_as_empty_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = CrawlerConfigStore(Path(tmpdir) / "crawler.json")
            self.assertEqual(json.loads(store.read_text()), {"source": {}})
            self.assertEqual(store.load(), CrawlerConfig())

    def test_write_text_saves_cleaned_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "nested" / "crawler.json"
            store = CrawlerConfigStore(path)
            store.write_text(
                json.dumps(
                    {
                        "source": {
                            "reddit": [{"keyword": "hades", "sort": "top", "post_limit": 2}],
                            "steam": [],
                        }
                    }
                )
            )

            saved = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(saved, {"source": {"reddit": [{"keyword": "hades", "post_limit": 2}]}})
            self.assertEqual(store.load().items("reddit")[0].post_limit, 2)

    def test_invalid_documents_are_rejected(self):
        for text in ["{not json", "[1, 2]", '{"source": []}', '{"source": {"steam": [{"sort": "hot"}]}}']:
            with self.subTest(text=text):
                with self.assertRaises(ConfigStoreError):
                    parse_config_text(text)


if __name__ == "__main__":
    unittest.main()
