import unittest

from fakes import FailingEncoder, RecordingEncoder, png_bytes, png_data_uri
from label_templates import RenderContext, get_renderer, list_element_types
from label_templates.images import decode_image_payload
from label_types import Box, DrawImage, DrawText, FillBox
from layout_model import ElementType, LayoutElement

BOX = Box(10, 20, 120, 40)


def _element(type_name: str, element_id: str = "el-1", **properties: object) -> LayoutElement:
    return LayoutElement(
        id=element_id,
        type_name=type_name,
        x=BOX.x,
        y=BOX.y,
        width=BOX.width,
        height=BOX.height,
        properties=properties,
    )


def _render(element: LayoutElement, context: RenderContext):
    return get_renderer(element.kind).render(element, BOX, context)


class TextRendererTests(unittest.TestCase):
    def test_bound_text_with_style(self) -> None:
        element = _element(
            "text",
            dataField="ProductName",
            content="Ignored",
            fontSize=200,
            fontWeight="bold",
            color="#FF0000",
        )
        result = _render(element, RenderContext(record={"ProductName": "Shampoo"}))
        self.assertFalse(result.degraded)
        self.assertEqual(
            result.instructions,
            (DrawText("Shampoo", font_size=72, color="#FF0000", bold=True),),
        )

    def test_product_code_alias_renders_text(self) -> None:
        result = _render(_element("product-code", text="SKU-9"), RenderContext())
        self.assertEqual(result.instructions[0], DrawText("SKU-9"))


class CodeRendererTests(unittest.TestCase):
    def test_barcode_uses_default_payload(self) -> None:
        encoder = RecordingEncoder()
        result = _render(
            _element("barcode", dataField="Code"),
            RenderContext(record={}, encoder=encoder),
        )
        self.assertEqual(encoder.linear_calls, ["123456789"])
        self.assertIsInstance(result.instructions[0], DrawImage)

    def test_qrcode_passes_error_correction(self) -> None:
        encoder = RecordingEncoder()
        _render(
            _element("qrcode", dataField="Code"),
            RenderContext(record={"Code": "XYZ"}, encoder=encoder, qr_error_correction="H"),
        )
        self.assertEqual(encoder.qr_calls, [("XYZ", "H")])

    def test_encoder_failure_draws_payload_text(self) -> None:
        for type_name in ("barcode", "qrcode"):
            with self.subTest(type_name=type_name):
                result = _render(
                    _element(type_name, data="ÄÖÜ"),
                    RenderContext(encoder=FailingEncoder()),
                )
                self.assertTrue(result.degraded)
                self.assertEqual(result.instructions, (DrawText("ÄÖÜ", font_size=8),))


class ImageRendererTests(unittest.TestCase):
    def test_missing_image_placeholder(self) -> None:
        result = _render(_element("image"), RenderContext())
        self.assertTrue(result.degraded)
        fill, caption = result.instructions
        self.assertEqual(fill, FillBox(fill="#F0F0F0"))
        assert isinstance(caption, DrawText)
        self.assertEqual(caption.text, "[Image]")
        self.assertEqual(caption.align, "center")

    def test_invalid_base64_placeholder(self) -> None:
        result = _render(_element("image", imageData="data:image/png;base64,@@@"), RenderContext())
        self.assertTrue(result.degraded)
        fill, caption = result.instructions
        self.assertEqual(fill, FillBox(fill="#FFE0E0"))
        assert isinstance(caption, DrawText)
        self.assertEqual(caption.text, "[Image Error]")

    def test_non_image_bytes_placeholder(self) -> None:
        result = _render(_element("logo", src="aGVsbG8="), RenderContext())
        assert isinstance(result.instructions[1], DrawText)
        self.assertEqual(result.instructions[1].text, "[Image Error]")

    def test_data_uri_is_decoded(self) -> None:
        result = _render(_element("image", src=png_data_uri()), RenderContext())
        self.assertFalse(result.degraded)
        self.assertEqual(result.instructions, (DrawImage(png_bytes()),))

    def test_dynamic_image_from_record_by_id(self) -> None:
        element = _element("dynamic-image", element_id="photo-1")
        result = _render(element, RenderContext(record={"photo-1": png_data_uri()}))
        self.assertEqual(result.instructions, (DrawImage(png_bytes()),))

    def test_dynamic_image_placeholder(self) -> None:
        result = _render(_element("dynamic-image"), RenderContext())
        assert isinstance(result.instructions[1], DrawText)
        self.assertEqual(result.instructions[1].text, "[Dynamic Image]")

    def test_decode_uses_last_comma(self) -> None:
        payload = "data:image/png;name=a,b;base64," + png_data_uri().split(",")[1]
        self.assertEqual(decode_image_payload(payload), png_bytes())


class ShapeRendererTests(unittest.TestCase):
    def test_rectangle_defaults(self) -> None:
        result = _render(_element("rectangle"), RenderContext())
        self.assertEqual(
            result.instructions,
            (FillBox(fill="#CCCCCC", stroke="#000000", stroke_width=1.0),),
        )

    def test_rectangle_without_border(self) -> None:
        result = _render(_element("rectangle", fillColor="#00FF00", borderWidth=0), RenderContext())
        self.assertEqual(result.instructions, (FillBox(fill="#00FF00"),))

    def test_line_is_thin_bar(self) -> None:
        result = _render(_element("line", stroke="#0000FF", strokeWidth="3"), RenderContext())
        self.assertEqual(result.instructions, (FillBox(fill="#0000FF", height=3.0),))


class UnknownRendererTests(unittest.TestCase):
    def test_diagnostic_text(self) -> None:
        result = _render(_element("totally-unknown"), RenderContext())
        self.assertTrue(result.degraded)
        self.assertEqual(
            result.instructions,
            (DrawText("[Unknown: totally-unknown]", font_size=8.0, color="#FF0000"),),
        )

    def test_every_type_has_a_renderer(self) -> None:
        for kind in ElementType:
            self.assertIsNotNone(get_renderer(kind))
        self.assertNotIn("unknown", list(list_element_types()))


if __name__ == "__main__":
    unittest.main()
