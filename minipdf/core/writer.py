"""Serialization of a whole PDF file.

The file is written in one linear pass:

1. header (version line and binary marker comment)
2. body: every indirect object, in registration order
3. cross-reference table with the byte offset of each object
4. trailer dictionary, ``startxref`` and the end-of-file marker

Each object's offset is recorded right before its body is written, so the
table in step 3 is only correct if nothing else writes to the sink meanwhile.
"""

import logging
from typing import BinaryIO, Iterable, Optional, Sequence

from ..exceptions import PdfIOError, UninitializedSinkError
from .indirect import IndirectObject
from .objects import Dictionary, Number

logger = logging.getLogger(__name__)

# Comment line with bytes above 127 so transfer tools treat the file as binary
BINARY_MARKER = b"%\xe2\xe3\xcf\xd3"

# First xref entry: head of the free-object list
FREE_LIST_HEAD = b"0000000000 65535 f\r\n"

EOF_MARKER = b"%%EOF\n"


class DocumentWriter:
    """Writes PDF sections to a binary sink and keeps track of the byte count.

    Example:
        with open("out.pdf", "wb") as fh:
            writer = DocumentWriter(fh)
            writer.write_document(registry, root=catalog)
    """

    def __init__(self, sink: BinaryIO):
        """Initialize writer.

        Args:
            sink: Binary file-like object with a ``write`` method

        Raises:
            UninitializedSinkError: If sink is None or cannot be written to
        """
        if sink is None:
            raise UninitializedSinkError("No output sink; cannot write the document")
        if not callable(getattr(sink, "write", None)):
            raise UninitializedSinkError(f"Output sink {sink!r} has no write() method")
        self.sink = sink
        self.offset = 0
        self.xref_offset: Optional[int] = None

    def write(self, data: bytes) -> int:
        """Write raw bytes, advancing ``offset``.

        Raises:
            PdfIOError: If the sink fails; ``bytes_written`` holds the total so far
        """
        view = memoryview(data)
        written = 0
        while written < len(view):
            try:
                n = self.sink.write(view[written:])
            except Exception as e:
                raise PdfIOError(
                    f"Write failed after {self.offset} bytes: {e}",
                    bytes_written=self.offset,
                    cause=e,
                ) from e
            if n is None:
                n = len(view) - written
            if n == 0:
                raise PdfIOError(
                    f"Sink accepted no bytes after {self.offset} bytes",
                    bytes_written=self.offset,
                )
            written += n
            self.offset += n
        return written

    def write_header(self, version: str = "1.7") -> None:
        """Write the version line, the binary marker and a blank line."""
        self.write(b"%PDF-" + version.encode("ascii") + b"\n" + BINARY_MARKER + b"\n\n")

    def write_body(self, objects: Iterable[IndirectObject]) -> None:
        """Write each object's body, fixing its offset first."""
        for obj in objects:
            # body() may raise; nothing of this object reaches the sink then
            body = obj.body()
            obj.fix(self.offset)
            self.write(body)
        logger.debug(f"Body written, {self.offset} bytes so far")

    def write_xref(self, objects: Sequence[IndirectObject]) -> None:
        """Write the cross-reference table and remember where it starts."""
        self.xref_offset = self.offset
        self.write(b"xref\n0 %d\n" % (len(objects) + 1))
        self.write(FREE_LIST_HEAD)
        for obj in objects:
            self.write(obj.xref_entry())
        logger.debug(f"Cross-reference table with {len(objects) + 1} entries at {self.xref_offset}")

    def write_trailer(self, size: int, root: IndirectObject, info: Optional[IndirectObject] = None) -> None:
        """Write the trailer dictionary, ``startxref`` and ``%%EOF``.

        Args:
            size: Number of xref entries (objects + 1)
            root: Document catalog
            info: Optional document information dictionary
        """
        trailer = Dictionary()
        trailer.put("Size", Number(size))
        trailer.put("Root", root)
        if info is not None:
            trailer.put("Info", info)
        self.write(b"trailer\n")
        self.write(trailer.to_bytes())
        self.write(b"\nstartxref\n%d\n" % self.xref_offset)
        self.write(EOF_MARKER)

    def write_document(
        self,
        objects: Sequence[IndirectObject],
        root: IndirectObject,
        info: Optional[IndirectObject] = None,
        version: str = "1.7",
    ) -> int:
        """Write a complete file.

        Returns:
            Total number of bytes written
        """
        objects = list(objects)
        self.write_header(version)
        self.write_body(objects)
        self.write_xref(objects)
        self.write_trailer(len(objects) + 1, root, info)
        logger.debug(f"Document written: {len(objects)} objects, {self.offset} bytes")
        return self.offset
