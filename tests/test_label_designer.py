import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from label_designer import _parse_data_pairs, main
from template_store import TemplateApiClient, TemplateNotFoundError


class LabelDesignerCliTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_parse_data_pairs(self) -> None:
        self.assertEqual(
            _parse_data_pairs(["ProductName=Soap", "Note=a=b"]),
            {"ProductName": "Soap", "Note": "a=b"},
        )
        with self.assertRaises(SystemExit):
            _parse_data_pairs(["novalue"])
        with self.assertRaises(SystemExit):
            _parse_data_pairs(["=x"])

    def test_renders_layout_file(self) -> None:
        layout = self.root / "layout.json"
        layout.write_text(
            json.dumps({"elements": [{"type": "text", "width": 100, "height": 20}]}),
            encoding="utf-8",
        )
        output = self.root / "out.pdf"
        self.assertEqual(
            main(["-l", str(layout), "-o", str(output), "-d", "ProductName=Soap"]),
            0,
        )
        self.assertTrue(output.read_bytes().startswith(b"%PDF"))

    def test_missing_required_fields_exit(self) -> None:
        templates = self.root / "templates.json"
        templates.write_text(
            json.dumps(
                [
                    {
                        "templateId": 4,
                        "name": "Tag",
                        "layoutJson": "{}",
                        "requiredFields": ["Code"],
                    }
                ]
            ),
            encoding="utf-8",
        )
        with self.assertRaises(SystemExit) as ctx:
            main(["-t", "4", "--templates", str(templates), "-o", str(self.root / "x.pdf")])
        self.assertIn("Code", str(ctx.exception))

    def test_unreadable_layout_file_exit(self) -> None:
        with self.assertRaises(SystemExit):
            main(["-l", str(self.root / "missing.json")])

    def test_main_loads_dotenv(self) -> None:
        with patch("label_designer.load_dotenv") as load_dotenv:
            main(["-o", str(self.root / "default.pdf")])
        load_dotenv.assert_called_once_with()

    def test_api_client_closed_after_render(self) -> None:
        with patch.object(TemplateApiClient, "close") as close, patch(
            "label_designer.generate_from_template",
            side_effect=TemplateNotFoundError(9),
        ):
            with self.assertRaises(SystemExit):
                main(["-t", "9", "--templates-url", "http://designer.local"])
        close.assert_called_once_with()


if __name__ == "__main__":
    unittest.main()
