"""
Tests for URL resolution helpers.
"""

import unittest

from mojalbum_downloader.utils.url import (
    append_segment,
    filename_from_url,
    resolve,
    same_url,
)


class TestResolve(unittest.TestCase):
    PAGE = "https://www.mojalbum.com/ana/albumi/2"

    def test_root_relative(self):
        self.assertEqual(
            resolve(self.PAGE, "/ana/album/morje"),
            "https://www.mojalbum.com/ana/album/morje",
        )

    def test_relative(self):
        self.assertEqual(
            resolve(self.PAGE, "3"),
            "https://www.mojalbum.com/ana/albumi/3",
        )

    def test_absolute_kept(self):
        self.assertEqual(
            resolve(self.PAGE, "https://cdn.mojalbum.com/x.jpg"),
            "https://cdn.mojalbum.com/x.jpg",
        )

    def test_surrounding_whitespace_ignored(self):
        self.assertEqual(
            resolve(self.PAGE, "  /ana  "),
            "https://www.mojalbum.com/ana",
        )


class TestAppendSegment(unittest.TestCase):
    def test_appends_to_path_without_slash(self):
        self.assertEqual(
            append_segment("https://www.mojalbum.com/ana", "albumi"),
            "https://www.mojalbum.com/ana/albumi",
        )

    def test_appends_to_path_with_slash(self):
        self.assertEqual(
            append_segment("https://www.mojalbum.com/ana/", "/albumi/"),
            "https://www.mojalbum.com/ana/albumi",
        )

    def test_appends_to_site_root(self):
        self.assertEqual(
            append_segment("https://www.mojalbum.com", "albumi"),
            "https://www.mojalbum.com/albumi",
        )

    def test_blank_segment_is_noop(self):
        url = "https://www.mojalbum.com/ana?x=1"
        self.assertEqual(append_segment(url, ""), url)
        self.assertEqual(append_segment(url, " / "), url)

    def test_idempotent(self):
        once = append_segment("https://www.mojalbum.com/ana/slika/7", "povecaj")
        twice = append_segment(once, "povecaj")
        self.assertEqual(once, "https://www.mojalbum.com/ana/slika/7/povecaj")
        self.assertEqual(twice, once)

    def test_existing_segment_case_insensitive(self):
        url = "https://www.mojalbum.com/ana/slika/7/Povecaj/"
        self.assertEqual(append_segment(url, "povecaj"), url)

    def test_query_dropped(self):
        self.assertEqual(
            append_segment("https://www.mojalbum.com/ana?ref=login", "albumi"),
            "https://www.mojalbum.com/ana/albumi",
        )


class TestSameUrl(unittest.TestCase):
    def test_identical(self):
        self.assertTrue(same_url("https://x.com/a", "https://x.com/a"))

    def test_host_case_insensitive(self):
        self.assertTrue(same_url("https://X.com/a", "https://x.com/a"))

    def test_fragment_ignored(self):
        self.assertTrue(same_url("https://x.com/a#top", "https://x.com/a"))

    def test_empty_path_equals_root(self):
        self.assertTrue(same_url("https://x.com", "https://x.com/"))

    def test_different_path(self):
        self.assertFalse(same_url("https://x.com/a/2", "https://x.com/a"))

    def test_different_query(self):
        self.assertFalse(same_url("https://x.com/a?p=2", "https://x.com/a"))


class TestFilenameFromUrl(unittest.TestCase):
    def test_last_segment(self):
        self.assertEqual(
            filename_from_url("https://img.mojalbum.com/a/b/IMG_001.jpg?v=3"),
            "IMG_001.jpg",
        )

    def test_percent_decoded(self):
        self.assertEqual(
            filename_from_url("https://img.mojalbum.com/po%C4%8Ditnice.jpg"),
            "počitnice.jpg",
        )

    def test_trailing_slash_gives_empty(self):
        self.assertEqual(filename_from_url("https://img.mojalbum.com/a/"), "")

    def test_no_path(self):
        self.assertEqual(filename_from_url("https://img.mojalbum.com"), "")


if __name__ == "__main__":
    unittest.main()
