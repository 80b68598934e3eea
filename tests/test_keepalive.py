#!/usr/bin/env python3
"""Keep-alive ping and log masking helpers."""

import unittest
from unittest.mock import patch

import requests

import support  # noqa: F401

from ubepari.app.keepalive import KeepAlive
from ubepari.utils.security import mask_pii


class TestKeepAlive(unittest.TestCase):

    @patch("ubepari.app.keepalive.requests.get")
    def test_ping_hits_url(self, mock_get):
        KeepAlive("http://localhost:3000/api/health", 60).ping()
        mock_get.assert_called_once_with("http://localhost:3000/api/health", timeout=10)

    @patch("ubepari.app.keepalive.requests.get")
    def test_ping_failure_is_ignored(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError("down")
        KeepAlive("http://localhost:3000/api/health", 60).ping()

    @patch("ubepari.app.keepalive.requests.get")
    def test_start_and_stop(self, mock_get):
        keepalive = KeepAlive("http://localhost:3000/api/health", 60)
        keepalive.start()
        self.assertTrue(keepalive._thread.is_alive())
        keepalive.stop()
        self.assertIsNone(keepalive._thread)

    @patch("ubepari.app.keepalive.requests.get")
    def test_restart_after_stop(self, mock_get):
        keepalive = KeepAlive("http://localhost:3000/api/health", 0.01)
        keepalive.start()
        keepalive.stop()
        keepalive.start()
        self.assertFalse(keepalive._stop.is_set())
        self.assertTrue(keepalive._thread.is_alive())
        keepalive.stop()


class TestMaskPii(unittest.TestCase):

    def test_phone_masked(self):
        self.assertEqual(mask_pii("call 0712345678"), "call *******678")

    def test_plain_text_untouched(self):
        self.assertEqual(mask_pii("Asha from Arusha"), "Asha from Arusha")
        self.assertEqual(mask_pii(""), "")


if __name__ == '__main__':
    unittest.main()
