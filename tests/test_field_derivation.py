import unittest

from pulse.ingestion.fields import derive_document, generate_preview
from pulse.ingestion.record_types import InputRecord
from pulse.scoring.nsfw import DomainBlocklist


class TestPreview(unittest.TestCase):
    def test_short_content_is_trimmed_only(self):
        self.assertEqual(generate_preview("  hello world \n"), "hello world")
        exact = "x" * 500
        self.assertEqual(generate_preview(exact), exact)

    def test_long_content_is_truncated_with_marker(self):
        text = "ab" * 400
        p = generate_preview(text)
        self.assertEqual(len(p), 503)
        self.assertEqual(p[:500], text[:500])
        self.assertTrue(p.endswith("..."))

    def test_counts_characters_not_bytes(self):
        text = "é" * 500
        self.assertEqual(generate_preview(text), text)
        longer = "日本" * 300
        p = generate_preview(longer)
        self.assertEqual(p, longer[:500] + "...")

    def test_empty(self):
        self.assertEqual(generate_preview(""), "")
        self.assertEqual(generate_preview("   "), "")


class TestDeriveDocument(unittest.TestCase):
    def test_defaults_for_missing_fields(self):
        doc = derive_document(InputRecord(url="https://good.example/a"), DomainBlocklist())
        self.assertEqual(doc.title, "")
        self.assertEqual(doc.content, "")
        self.assertEqual(doc.preview, "")
        self.assertEqual(doc.language, "en")
        self.assertEqual(doc.meta_tags, "")
        self.assertFalse(doc.nsfw)

    def test_blank_language_defaults_to_en(self):
        doc = derive_document(InputRecord(url="https://good.example/a", language=""), DomainBlocklist())
        self.assertEqual(doc.language, "en")

    def test_fields_carried_through(self):
        rec = InputRecord(
            url="https://good.example/a",
            title="Title",
            content_text="  Body text  ",
            meta_content="kw1, kw2",
            language="de",
        )
        doc = derive_document(rec, DomainBlocklist.from_lines(["bad.example"]))
        self.assertEqual(doc.content, "  Body text  ")
        self.assertEqual(doc.preview, "Body text")
        self.assertEqual(doc.language, "de")
        self.assertEqual(doc.meta_tags, "kw1, kw2")
        self.assertEqual(set(doc.as_fields()), {"url", "title", "content", "preview", "language", "meta_tags", "nsfw"})

    def test_custom_preview_length(self):
        rec = InputRecord(url="https://good.example/a", content_text="abcdef")
        self.assertEqual(derive_document(rec, DomainBlocklist(), preview_chars=3).preview, "abc...")


if __name__ == "__main__":
    unittest.main()
