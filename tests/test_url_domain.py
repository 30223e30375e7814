import unittest

from pulse.ingestion.url_utils import extract_domain, is_nsfw_domain


class TestExtractDomain(unittest.TestCase):
    def test_strips_scheme_www_and_path(self):
        self.assertEqual(extract_domain("https://www.Example.COM/path/to?x=1"), "example.com")
        self.assertEqual(extract_domain("http://example.com"), "example.com")
        self.assertEqual(extract_domain("example.com/a/b"), "example.com")

    def test_strips_only_one_scheme_prefix(self):
        self.assertEqual(extract_domain("http://https://example.com/"), "https:")

    def test_empty_is_none(self):
        self.assertIsNone(extract_domain(""))
        self.assertIsNone(extract_domain("https://"))
        self.assertIsNone(extract_domain("/just/a/path"))

    def test_idempotent_on_own_output(self):
        for raw in ["https://www.bad.example/page", "Sub.Domain.org", "free text here", "http://x.y/z"]:
            once = extract_domain(raw)
            self.assertEqual(extract_domain(once), once)

    def test_free_text_rarely_matches(self):
        blocklist = {"bad.example"}
        self.assertTrue(is_nsfw_domain("bad.example", blocklist))
        self.assertTrue(is_nsfw_domain("bad.example/anything after", blocklist))
        self.assertFalse(is_nsfw_domain("a story about bad.example", blocklist))


if __name__ == "__main__":
    unittest.main()
