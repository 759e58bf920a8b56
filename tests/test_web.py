"""Tests for the Flask review application."""

import os
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from jinja2 import TemplateError

from app.web import create_app
from core.services.fingerprint import compute_etag
from infrastructure.settings import JsonSettings
from tests.helpers import make_state


class ReviewAppTest(unittest.TestCase):
    """Tests for the HTTP surface."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.state = make_state(self.root)
        settings = JsonSettings.from_dict({"transfer": {"chunk_size": 4}})
        self.app = create_app(self.state, settings)
        self.client = self.app.test_client()

    def tearDown(self):
        self._tmp.cleanup()

    def test_index_redirects_to_first_group(self):
        resp = self.client.get("/")
        self.assertEqual(308, resp.status_code)
        self.assertTrue(resp.headers["Location"].endswith("/group/0"))

    def test_group_page_lists_images(self):
        resp = self.client.get("/group/0")
        self.assertEqual(200, resp.status_code)
        html = resp.get_data(as_text=True)
        self.assertIn("2020/copy/a.jpg", html)
        self.assertIn("/group/0/image/1", html)
        self.assertIn("/group/1", html)

    def test_invalid_group_redirects_to_first(self):
        resp = self.client.get("/group/5")
        self.assertEqual(302, resp.status_code)
        self.assertTrue(resp.headers["Location"].endswith("/group/0"))

    def test_image_streamed_with_headers(self):
        resp = self.client.get("/group/0/image/0")
        try:
            self.assertEqual(200, resp.status_code)
            self.assertEqual(b"data:2020/a.jpg", resp.get_data())
            self.assertEqual("image/jpeg", resp.headers["Content-Type"])
            self.assertEqual(str(len(b"data:2020/a.jpg")), resp.headers["Content-Length"])
            self.assertEqual(
                compute_etag(self.state.base_dir, 0, 0, "2020/a.jpg"), resp.headers["ETag"]
            )
        finally:
            resp.close()

    def test_conditional_get_not_modified(self):
        etag = compute_etag(self.state.base_dir, 0, 0, "2020/a.jpg")
        resp = self.client.get("/group/0/image/0", headers={"If-None-Match": etag})
        self.assertEqual(304, resp.status_code)
        self.assertEqual(b"", resp.get_data())
        self.assertEqual(etag, resp.headers["ETag"])

    def test_stale_precondition_gets_full_body(self):
        resp = self.client.get("/group/0/image/0", headers={"If-None-Match": '"stale"'})
        try:
            self.assertEqual(200, resp.status_code)
            self.assertEqual(b"data:2020/a.jpg", resp.get_data())
        finally:
            resp.close()

    def test_invalid_image_address_is_404(self):
        resp = self.client.get("/group/9/image/0")
        self.assertEqual(404, resp.status_code)
        self.assertEqual("Invalid group index", resp.get_data(as_text=True))
        resp = self.client.get("/group/0/image/9")
        self.assertEqual(404, resp.status_code)
        self.assertEqual("Invalid image index", resp.get_data(as_text=True))

    def test_missing_file_redirects_to_placeholder(self):
        os.remove(self.root / "2020" / "a.jpg")
        resp = self.client.get("/group/0/image/0")
        self.assertEqual(302, resp.status_code)
        self.assertTrue(resp.headers["Location"].endswith("/static/missing.svg"))

    def test_placeholder_is_served(self):
        resp = self.client.get("/static/missing.svg")
        try:
            self.assertEqual(200, resp.status_code)
            self.assertIn(b"<svg", resp.get_data())
        finally:
            resp.close()

    def test_delete_then_fetch_then_delete_again(self):
        resp = self.client.delete("/group/1/image/0")
        self.assertEqual(200, resp.status_code)
        self.assertEqual("Deleted", resp.get_data(as_text=True))
        self.assertTrue((self.root / "trash" / "2021" / "b.png").exists())

        resp = self.client.get("/group/1/image/0")
        self.assertEqual(302, resp.status_code)

        resp = self.client.delete("/group/1/image/0")
        self.assertEqual(500, resp.status_code)
        self.assertIn("No such file", resp.get_data(as_text=True))

    def test_delete_invalid_address_is_404(self):
        resp = self.client.delete("/group/0/image/9")
        self.assertEqual(404, resp.status_code)
        self.assertEqual("Invalid image index", resp.get_data(as_text=True))
        self.assertFalse((self.root / "trash").exists())

    def test_render_failure_is_500(self):
        with mock.patch("app.web.render_template", side_effect=TemplateError("boom")):
            resp = self.client.get("/group/0")
        self.assertEqual(500, resp.status_code)
        self.assertIn("Failed to render template. Error: boom", resp.get_data(as_text=True))


class EmptyReportTest(unittest.TestCase):
    """A report with no groups still serves a page."""

    def test_empty_store_renders_notice(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            state = make_state(Path(tmpdir), report="")
            client = create_app(state).test_client()

            resp = client.get("/group/0")
            self.assertEqual(200, resp.status_code)
            self.assertIn("No duplicate groups", resp.get_data(as_text=True))

            resp = client.get("/group/3")
            self.assertEqual(200, resp.status_code)

            resp = client.get("/group/0/image/0")
            self.assertEqual(404, resp.status_code)


if __name__ == "__main__":
    unittest.main()
