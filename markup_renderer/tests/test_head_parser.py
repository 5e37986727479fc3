"""Tests for configuration overrides and metadata read from the head."""
import unittest

from markup_renderer.model.elements import Node
from markup_renderer.parser.head_parser import configure, extract_metadata
from markup_renderer.parser.markup_loader import load_markup


def head_of(markup):
    return load_markup(markup).first_child("head")


class ConfigureTest(unittest.TestCase):
    def test_attributes_update_mapping(self):
        config = {"debug": False}
        configure(config, Node(name="head", attributes={"debug": True, "basePath": "/tmp"}))

        self.assertEqual(config, {"debug": True, "basePath": "/tmp"})

    def test_children_configure_nested_entries(self):
        config = {"styles": {"hr": {"thickness": 4}}, "colors": {"grey": "#ddd"}}
        head = head_of(
            "<pdf><head>"
            '<styles><bluehr extends="hr" color="blue"/></styles>'
            '<colors dark="#333"/>'
            '<document><margins top="5"/></document>'
            "</head></pdf>"
        )

        configure(config, head)

        self.assertEqual(config["styles"]["bluehr"], {"extends": "hr", "color": "blue"})
        self.assertEqual(config["styles"]["hr"], {"thickness": 4})
        self.assertEqual(config["colors"], {"grey": "#ddd", "dark": "#333"})
        self.assertEqual(config["document"], {"margins": {"top": 5}})

    def test_text_children_are_ignored(self):
        config = {}
        configure(config, head_of("<pdf><head><title>Doc</title></head></pdf>"))

        self.assertEqual(config, {"title": {}})


class ExtractMetadataTest(unittest.TestCase):
    def test_title_and_filename(self):
        info = extract_metadata(head_of("<pdf><head><title>Report</title><filename>out.pdf</filename></head></pdf>"))

        self.assertEqual(info, {"Title": "Report", "Filename": "out.pdf"})

    def test_meta_children_are_capitalized_and_win(self):
        info = extract_metadata(
            head_of(
                "<pdf><head><title>Report</title>"
                "<meta><author>Ada</author><title>Override</title></meta>"
                "</head></pdf>"
            )
        )

        self.assertEqual(info, {"Title": "Override", "Author": "Ada"})

    def test_missing_head(self):
        self.assertEqual(extract_metadata(None), {})


if __name__ == "__main__":
    unittest.main()
