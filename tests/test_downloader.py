"""
Tests for the image resolver and downloader.
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

import requests

from mojalbum_downloader.downloader import download_image, image_file_name
from mojalbum_downloader.session import SiteSession

BASE = "https://www.mojalbum.com"
DETAIL = BASE + "/ana/album/morje/slika/1/povecaj"


def _make_response(url, status_code=200, content=b""):
    resp = MagicMock(spec=requests.Response)
    resp.url = url
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.content = content
    resp.iter_content.return_value = iter([content])
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error for url: {url}"
        )
    return resp


class TestImageFileName(unittest.TestCase):
    def test_from_last_segment(self):
        self.assertEqual(image_file_name(BASE + "/slike/abc/IMG_1.jpg"), "IMG_1.jpg")

    def test_generated_when_missing(self):
        name = image_file_name(BASE + "/slike/abc/")
        self.assertTrue(name.endswith(".jpg"))
        self.assertEqual(len(name), 32 + len(".jpg"))

    def test_generated_names_are_unique(self):
        self.assertNotEqual(image_file_name(BASE + "/"), image_file_name(BASE + "/"))

    def test_illegal_characters_cleaned(self):
        self.assertEqual(image_file_name(BASE + "/slike/a%3Ab.jpg"), "a_b.jpg")


class TestDownloadImage(unittest.TestCase):
    def _site(self, pages):
        session = MagicMock()

        def _get(url, **kwargs):
            status, content = pages.get(url, (404, b""))
            return _make_response(url, status, content)

        session.get.side_effect = _get
        return SiteSession(BASE, session=session), session

    def test_og_image_downloaded(self):
        detail = b'<meta property="og:image" content="https://img.mojalbum.com/v/1.jpg">'
        site, _ = self._site({
            DETAIL: (200, detail),
            "https://img.mojalbum.com/v/1.jpg": (200, b"JPEGDATA"),
        })
        with tempfile.TemporaryDirectory() as tmpdir:
            saved = download_image(site, DETAIL, Path(tmpdir))
            self.assertEqual(saved, Path(tmpdir) / "1.jpg")
            self.assertEqual(saved.read_bytes(), b"JPEGDATA")

    def test_site_relative_url_resolved_against_base(self):
        detail = b'<a id="image" href="/slike/velika/2.jpg">x</a>'
        site, session = self._site({
            DETAIL: (200, detail),
            BASE + "/slike/velika/2.jpg": (200, b"PNG"),
        })
        with tempfile.TemporaryDirectory() as tmpdir:
            saved = download_image(site, DETAIL, Path(tmpdir))
            self.assertEqual(saved.read_bytes(), b"PNG")
        requested = [c.args[0] for c in session.get.call_args_list]
        self.assertEqual(requested, [DETAIL, BASE + "/slike/velika/2.jpg"])

    def test_existing_file_overwritten(self):
        detail = b'<img id="image" src="/slike/3.jpg">'
        site, _ = self._site({
            DETAIL: (200, detail),
            BASE + "/slike/3.jpg": (200, b"NEW"),
        })
        with tempfile.TemporaryDirectory() as tmpdir:
            (Path(tmpdir) / "3.jpg").write_bytes(b"OLD")
            download_image(site, DETAIL, Path(tmpdir))
            self.assertEqual((Path(tmpdir) / "3.jpg").read_bytes(), b"NEW")

    def test_no_image_on_page(self):
        site, session = self._site({DETAIL: (200, b"<html><body>Ni slike</body></html>")})
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertLogs("mojalbum-downloader", level="WARNING") as logs:
                saved = download_image(site, DETAIL, Path(tmpdir))
            self.assertIsNone(saved)
            self.assertEqual(list(Path(tmpdir).iterdir()), [])
        self.assertIn(DETAIL, logs.output[0])
        self.assertEqual(session.get.call_count, 1)

    def test_detail_page_error_propagates(self):
        site, _ = self._site({DETAIL: (500, b"")})
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(requests.HTTPError):
                download_image(site, DETAIL, Path(tmpdir))

    def test_image_error_propagates_and_writes_nothing(self):
        detail = b'<img id="image" src="/slike/4.jpg">'
        site, _ = self._site({DETAIL: (200, detail)})
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(requests.HTTPError):
                download_image(site, DETAIL, Path(tmpdir))
            self.assertEqual(list(Path(tmpdir).iterdir()), [])


if __name__ == "__main__":
    unittest.main()
