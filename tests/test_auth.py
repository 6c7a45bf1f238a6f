"""
Tests for the authentication module – login form exchange.
"""

import unittest
from unittest.mock import MagicMock

import requests

from mojalbum_downloader.auth import login
from mojalbum_downloader.errors import (
    AuthConfigurationError,
    AuthRejectedError,
    AuthRequestError,
    ConfigurationError,
)
from mojalbum_downloader.session import SiteSession

BASE = "https://www.mojalbum.com"


class TestLogin(unittest.TestCase):
    def _make_response(self, url=BASE + "/ana", text="<html>Pozdravljeni</html>",
                       status_code=200):
        resp = MagicMock(spec=requests.Response)
        resp.url = url
        resp.text = text
        resp.status_code = status_code
        resp.ok = status_code < 400
        return resp

    def _make_site(self, resp=None):
        session = MagicMock()
        session.post.return_value = resp if resp is not None else self._make_response()
        session.cookies = requests.cookies.RequestsCookieJar()
        return SiteSession(BASE, session=session), session

    def test_returns_effective_landing_url(self):
        site, _ = self._make_site(self._make_response(url=BASE + "/ana"))
        self.assertEqual(login(site, "ana", "skrivnost"), BASE + "/ana")

    def test_posts_four_form_fields(self):
        site, session = self._make_site()
        login(site, "ana", "skrivnost")

        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], BASE + "/prijava")
        self.assertEqual(kwargs["data"], {
            "txtUserName": "ana",
            "txtPassword": "skrivnost",
            "cbAutoLogin": "1",
            "btnLogin": "prijava",
        })
        self.assertTrue(kwargs["allow_redirects"])
        self.assertEqual(kwargs["headers"]["Referer"], BASE + "/prijava")

    def test_falls_back_to_site_root(self):
        site, _ = self._make_site(self._make_response(url=""))
        self.assertEqual(login(site, "ana", "skrivnost"), BASE + "/")

    def test_empty_username_sends_nothing(self):
        site, session = self._make_site()
        with self.assertRaises(AuthConfigurationError):
            login(site, "", "skrivnost")
        session.post.assert_not_called()

    def test_whitespace_password_sends_nothing(self):
        site, session = self._make_site()
        with self.assertRaises(AuthConfigurationError):
            login(site, "ana", "   ")
        session.post.assert_not_called()

    def test_configuration_error_is_a_configuration_error(self):
        site, _ = self._make_site()
        with self.assertRaises(ConfigurationError):
            login(site, None, None)

    def test_non_success_status(self):
        site, _ = self._make_site(self._make_response(status_code=503))
        with self.assertRaises(AuthRequestError) as ctx:
            login(site, "ana", "skrivnost")
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.url, BASE + "/prijava")

    def test_login_form_returned_means_rejected(self):
        form = '<form><input name="txtUserName"><input name="txtPassword"></form>'
        site, _ = self._make_site(self._make_response(url=BASE + "/prijava", text=form))
        with self.assertRaises(AuthRejectedError):
            login(site, "ana", "napacno")

    def test_network_error_propagates(self):
        site, session = self._make_site()
        session.post.side_effect = requests.ConnectionError("down")
        with self.assertRaises(requests.ConnectionError):
            login(site, "ana", "skrivnost")


if __name__ == "__main__":
    unittest.main()
