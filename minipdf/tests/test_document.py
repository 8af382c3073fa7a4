"""Tests for the Document API: pages, drawing and output."""

import io
from datetime import datetime

import pytest

from minipdf import (
    Config,
    Document,
    DocumentState,
    DocumentStateError,
    InvalidHandleError,
    LineCap,
    LineJoin,
    Name,
    PdfIOError,
    UninitializedSinkError,
    UnsupportedTypeError,
)
from minipdf.validator import PdfValidator


class BrokenSink:
    """Sink that fails after ``limit`` bytes."""

    def __init__(self, limit):
        self.data = bytearray()
        self.limit = limit
        self.closed = False

    def write(self, data):
        if len(self.data) + len(data) > self.limit:
            raise OSError("No space left on device")
        self.data.extend(data)
        return len(data)

    def close(self):
        self.closed = True


def line_document(**kwargs):
    doc = Document(**kwargs)
    doc.new_page(200, 100)
    doc.move_to(10, 10)
    doc.line_to(190, 90)
    doc.stroke()
    return doc


class TestStructure:
    """Test catalog, page tree and page objects."""

    def test_catalog_and_page_tree_numbers(self):
        doc = Document()
        assert doc.catalog.number == 1
        assert doc.page_tree.number == 2

    def test_empty_document(self):
        doc = Document()
        sink = io.BytesIO()
        doc.write_to(sink)
        data = sink.getvalue()
        assert b"1 0 obj\n<<\n/Type /Catalog\n/Pages 2 0 R\n>>\nendobj\n" in data
        assert b"2 0 obj\n<<\n/Type /Pages\n/Kids [ ]\n/Count 0\n>>\nendobj\n" in data
        assert PdfValidator().validate(data).valid

    def test_single_page(self):
        doc = line_document()
        sink = io.BytesIO()
        doc.write_to(sink)
        data = sink.getvalue()

        content = b"10 10 m\n190 90 l\nS"
        assert b"2 0 obj\n<<\n/Type /Pages\n/Kids [ 3 0 R ]\n/Count 1\n>>\nendobj\n" in data
        assert (
            b"3 0 obj\n<<\n/Type /Page\n/Parent 2 0 R\n/MediaBox [ 0 0 200 100 ]\n"
            b"/Resources <<\n>>\n/Contents [ 4 0 R ]\n>>\nendobj\n"
        ) in data
        assert b"4 0 obj\n<<\n/Length %d\n>>\nstream\n%s\nendstream\nendobj\n" % (len(content), content) in data

    def test_pages_share_tree(self):
        doc = Document()
        first = doc.new_page(100, 100)
        second = doc.new_page(300, 200)
        doc.finalize()
        kids = doc.page_tree.value["Kids"]
        assert [k for k in kids] == [first.handle, second.handle]
        assert doc.page_tree.value["Count"].value == 2
        assert second.handle.value["Parent"] is doc.page_tree

    def test_default_page_size_from_config(self):
        doc = Document(config=Config(page_width=595, page_height=842))
        page = doc.new_page()
        assert (page.width, page.height) == (595, 842)

    def test_invalid_page_size(self):
        with pytest.raises(ValueError):
            Document().new_page(0, 100)

    def test_info(self):
        doc = Document(config=Config(producer="unit-test"))
        doc.set_info(title="Report", author="Someone", creation_date=datetime(2024, 1, 2, 3, 4, 5))
        sink = io.BytesIO()
        doc.write_to(sink)
        data = sink.getvalue()
        assert (
            b"<<\n/Title (Report)\n/Author (Someone)\n/Producer (unit-test)\n"
            b"/CreationDate (D:20240102030405)\n>>"
        ) in data
        assert b"/Info 3 0 R" in data

    def test_set_info_twice_replaces(self):
        doc = Document()
        first = doc.set_info(title="One")
        second = doc.set_info(title="Two")
        assert first is second
        assert second.value["Title"].value == b"Two"

    def test_user_objects(self):
        doc = Document()
        obj = doc.add_object()
        doc.resolve(obj, {"Type": Name("Custom")})
        sink = io.BytesIO()
        doc.write_to(sink)
        assert b"3 0 obj\n<<\n/Type /Custom\n>>\nendobj\n" in sink.getvalue()


class TestDrawing:
    """Test content stream operators."""

    def test_operators(self):
        doc = Document()
        page = doc.new_page()
        doc.line_width(2)
        doc.line_cap(LineCap.ROUND)
        doc.line_join(LineJoin.BEVEL)
        doc.move_to(0, 0)
        doc.line_to(1.5, 2.25)
        doc.curve_to(1, 2, 3, 4, 5, 6)
        doc.curve_v(1, 2, 3, 4)
        doc.curve_y(1, 2, 3, 4)
        doc.rectangle(10, 20, 30, 40)
        doc.close_path()
        doc.stroke()
        doc.fill()
        assert page.operations == [
            "2 w",
            "1 J",
            "2 j",
            "0 0 m",
            "1.5 2.25 l",
            "1 2 3 4 5 6 c",
            "1 2 3 4 v",
            "1 2 3 4 y",
            "10 20 30 40 re",
            "h",
            "S",
            "f",
        ]

    def test_operators_go_to_current_page(self):
        doc = Document()
        first = doc.new_page()
        doc.move_to(1, 1)
        second = doc.new_page()
        doc.line_to(2, 2)
        assert first.operations == ["1 1 m"]
        assert second.operations == ["2 2 l"]

    def test_draw_without_page(self):
        with pytest.raises(DocumentStateError):
            Document().move_to(1, 1)

    def test_invalid_styles(self):
        doc = Document()
        doc.new_page()
        with pytest.raises(ValueError):
            doc.line_cap(5)
        with pytest.raises(ValueError):
            doc.line_join(-1)


class TestWriting:
    """Test the write pass and the document lifecycle."""

    def test_states(self):
        doc = line_document()
        assert doc.state is DocumentState.OPEN
        doc.finalize()
        assert doc.state is DocumentState.FINALIZING
        doc.finalize()
        doc.write_to(io.BytesIO())
        assert doc.state is DocumentState.WRITTEN

    def test_no_changes_after_finalize(self):
        doc = line_document()
        doc.finalize()
        with pytest.raises(DocumentStateError):
            doc.new_page()
        with pytest.raises(DocumentStateError):
            doc.add_object(1)
        with pytest.raises(DocumentStateError):
            doc.line_to(0, 0)

    def test_write_twice(self):
        doc = line_document()
        doc.write_to(io.BytesIO())
        with pytest.raises(DocumentStateError):
            doc.write_to(io.BytesIO())

    def test_bytes_written(self):
        doc = line_document()
        sink = io.BytesIO()
        n = doc.write_to(sink)
        assert n == len(sink.getvalue()) == doc.bytes_written

    def test_constructor_sink(self):
        sink = io.BytesIO()
        doc = line_document(sink=sink)
        doc.write_to()
        assert sink.getvalue().startswith(b"%PDF-1.7\n")
        assert not sink.closed

    def test_no_sink(self):
        doc = line_document()
        with pytest.raises(UninitializedSinkError):
            doc.write_to()
        assert doc.state is DocumentState.OPEN

    def test_xref_consistency(self):
        doc = Document()
        for size in [(100, 100), (200, 300), (612, 792)]:
            doc.new_page(*size)
            doc.rectangle(1, 1, 50, 50)
            doc.fill()
        sink = io.BytesIO()
        doc.write_to(sink)
        data = sink.getvalue()
        for obj in doc.registry:
            assert data[obj.offset:].startswith(b"%d 0 obj" % obj.number)
        result = PdfValidator().validate(data)
        assert result.valid, str(result)
        assert result.stats["objects"] == len(doc.registry)

    def test_output_is_reproducible(self):
        first, second = io.BytesIO(), io.BytesIO()
        line_document().write_to(first)
        line_document().write_to(second)
        assert first.getvalue() == second.getvalue()

    def test_io_failure(self):
        doc = line_document()
        sink = BrokenSink(limit=100)
        with pytest.raises(PdfIOError) as exc_info:
            doc.write_to(sink)
        assert doc.state is DocumentState.FAILED
        assert doc.bytes_written == exc_info.value.bytes_written == len(sink.data)
        assert not sink.closed
        with pytest.raises(DocumentStateError):
            doc.write_to(io.BytesIO())

    def test_text_mode_sink(self):
        doc = line_document()
        with pytest.raises(PdfIOError) as exc_info:
            doc.write_to(io.StringIO())
        assert isinstance(exc_info.value.__cause__, TypeError)
        assert doc.state is DocumentState.FAILED
        assert doc.bytes_written == 0

    def test_any_error_while_writing_fails_the_document(self):
        class Exploding(Name):
            def to_bytes(self):
                raise RuntimeError("cannot render")

        doc = Document()
        doc.add_object(Exploding("X"))
        sink = io.BytesIO()
        with pytest.raises(RuntimeError):
            doc.write_to(sink)
        assert doc.state is DocumentState.FAILED
        assert doc.bytes_written == len(sink.getvalue()) > 0
        assert b"endobj" in sink.getvalue()
        with pytest.raises(DocumentStateError, match="failed"):
            doc.write_to(io.BytesIO())

    def test_unwritable_name_rejected_when_added(self):
        doc = Document()
        with pytest.raises(UnsupportedTypeError):
            doc.add_object({"\u6f22": 1})
        assert doc.state is DocumentState.OPEN
        assert len(doc.registry) == 2
        sink = io.BytesIO()
        doc.write_to(sink)
        assert PdfValidator().validate(sink.getvalue()).valid

    def test_foreign_reference_fails_before_output(self):
        other = Document()
        foreign = other.add_object(1)
        doc = Document()
        doc.add_object({"Elsewhere": foreign})
        sink = io.BytesIO()
        with pytest.raises(InvalidHandleError):
            doc.write_to(sink)
        assert sink.getvalue() == b""

    def test_save(self, tmp_path):
        path = tmp_path / "line.pdf"
        n = line_document().save(path)
        assert path.stat().st_size == n
        result = PdfValidator().validate(path)
        assert result.valid, str(result)
        assert result.trailer["Root"] == "1 0 R"

    def test_save_to_missing_directory(self, tmp_path):
        doc = line_document()
        with pytest.raises(PdfIOError):
            doc.save(tmp_path / "missing" / "out.pdf")
        assert doc.state is DocumentState.OPEN

    def test_pdf_version_from_config(self):
        doc = Document(config=Config(pdf_version="1.4"))
        sink = io.BytesIO()
        doc.write_to(sink)
        assert sink.getvalue().startswith(b"%PDF-1.4\n")
