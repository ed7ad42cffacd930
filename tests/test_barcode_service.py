import unittest
from io import BytesIO

from PIL import Image

from barcode_service import BarcodeService


class BarcodeServiceTests(unittest.TestCase):
    def setUp(self) -> None:
        self.service = BarcodeService()

    def test_linear_code_is_fixed_size_png(self) -> None:
        png = self.service.encode_linear("123456789")
        with Image.open(BytesIO(png)) as img:
            self.assertEqual(img.format, "PNG")
            self.assertEqual(img.size, (300, 100))

    def test_linear_code_is_deterministic(self) -> None:
        self.assertEqual(
            self.service.encode_linear("ABC-123"),
            self.service.encode_linear("ABC-123"),
        )

    def test_empty_linear_payload_raises(self) -> None:
        with self.assertRaises(ValueError):
            self.service.encode_linear("")

    def test_qr_code_is_square_png(self) -> None:
        png = self.service.encode_2d("https://example.com/p/1", "Q")
        with Image.open(BytesIO(png)) as img:
            self.assertEqual(img.format, "PNG")
            width, height = img.size
            self.assertEqual(width, height)

    def test_higher_error_correction_is_not_smaller(self) -> None:
        low = self.service.encode_2d("123456789", "L")
        high = self.service.encode_2d("123456789", "H")
        with Image.open(BytesIO(low)) as low_img, Image.open(BytesIO(high)) as high_img:
            self.assertGreaterEqual(high_img.size[0], low_img.size[0])

    def test_unknown_error_correction_raises(self) -> None:
        with self.assertRaises(ValueError):
            self.service.encode_2d("123", "Z")


if __name__ == "__main__":
    unittest.main()
