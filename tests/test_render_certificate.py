from io import BytesIO
import pytest
from PIL import Image
from PyPDF2 import PdfReader

from certificate import RenderError
from generate_certificate import render_certificate


def test_render_produces_single_a4_page():
    pdf = render_certificate('Jane Doe', 'Distributed Systems', '2024-05-01')
    assert pdf.startswith(b'%PDF')
    reader = PdfReader(BytesIO(pdf))
    assert len(reader.pages) == 1
    box = reader.pages[0].mediabox
    assert float(box.width) == pytest.approx(595.27, abs=0.1)
    assert float(box.height) == pytest.approx(841.89, abs=0.1)
    text = reader.pages[0].extract_text()
    assert 'CERTIFICATE OF COMPLETION' in text
    assert 'This is to certify that' in text
    assert 'has successfully completed the course' in text


def test_render_with_background(tmp_path):
    path = tmp_path / 'bg.png'
    Image.new('RGB', (60, 80), 'beige').save(path)
    plain = render_certificate('A', 'B', 'C')
    with_bg = render_certificate('A', 'B', 'C', str(path))
    assert with_bg.startswith(b'%PDF')
    assert b'/Subtype /Image' in with_bg
    assert b'/Subtype /Image' not in plain


def test_missing_background_renders_without_it(tmp_path, caplog):
    pdf = render_certificate('A', 'B', 'C', str(tmp_path / 'nope.png'))
    assert pdf.startswith(b'%PDF')
    assert 'not found' in caplog.text


def test_corrupt_background_raises_render_error(tmp_path):
    path = tmp_path / 'bg.png'
    path.write_bytes(b'not an image at all')
    with pytest.raises(RenderError) as exc:
        render_certificate('A', 'B', 'C', str(path))
    assert exc.value.status_code == 500
    assert exc.value.__cause__ is not None
