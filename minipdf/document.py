"""Document class - entry point for building and writing a PDF file."""
import logging
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, BinaryIO, List, Optional, Union

from .config import Config
from .core.geometry import Rect
from .core.indirect import IndirectObject, ObjectRegistry
from .core.objects import Name, Stream
from .core.writer import DocumentWriter
from .exceptions import DocumentStateError, PdfIOError, UninitializedSinkError
from .graphics import Coordinate, GraphicsMixin
from .page import Page

logger = logging.getLogger(__name__)


class DocumentState(Enum):
    """Lifecycle of a document."""
    OPEN = "open"              # Accepting objects, pages and drawing operators
    FINALIZING = "finalizing"  # Structure resolved, no new objects
    WRITTEN = "written"        # Output fully emitted
    FAILED = "failed"          # Writing failed; partial output may exist


class Document(GraphicsMixin):
    """A PDF document written to a binary sink.

    The catalog is always object 1 and the page tree object 2. Both are
    registered up front so pages can point at the tree before its list of
    kids is known.

    Example:
        >>> doc = Document()
        >>> doc.new_page(200, 100)
        >>> doc.move_to(10, 10)
        >>> doc.line_to(190, 90)
        >>> doc.stroke()
        >>> doc.save("line.pdf")
    """

    def __init__(self, sink: Optional[BinaryIO] = None, config: Optional[Config] = None):
        """Initialize a document.

        Args:
            sink: Binary output used by ``write_to`` when none is passed there
            config: Optional Config object (defaults apply otherwise)
        """
        self.config = config or Config()
        self.sink = sink
        self.state = DocumentState.OPEN
        self.bytes_written = 0
        self.registry = ObjectRegistry(encoding=self.config.string_encoding)
        self.pages: List[Page] = []
        self._current_page: Optional[Page] = None
        self._info: Optional[IndirectObject] = None

        self.catalog = self.registry.register()
        self.page_tree = self.registry.register()
        self.registry.resolve(self.catalog, {"Type": Name("Catalog"), "Pages": self.page_tree})

    def _require_open(self, action: str) -> None:
        if self.state is not DocumentState.OPEN:
            raise DocumentStateError(f"Cannot {action}: document is {self.state.value}")

    # ==================== Objects ====================

    def add_object(self, value: Any = None) -> IndirectObject:
        """Register an indirect object owned by this document.

        Args:
            value: Initial content; a Null placeholder when omitted

        Returns:
            Handle to embed in other objects
        """
        self._require_open("add objects")
        return self.registry.register(value)

    def resolve(self, handle: IndirectObject, value: Any) -> None:
        """Set the content of an object returned by ``add_object``."""
        self._require_open("resolve objects")
        self.registry.resolve(handle, value)

    def set_info(
        self,
        title: Optional[str] = None,
        author: Optional[str] = None,
        subject: Optional[str] = None,
        creator: Optional[str] = None,
        creation_date: Optional[datetime] = None,
    ) -> IndirectObject:
        """Set the document information dictionary.

        ``Producer`` comes from the configuration. Calling again replaces the
        previous values.

        Returns:
            The Info indirect object
        """
        self._require_open("set document info")
        info = {}
        if title is not None:
            info["Title"] = title
        if author is not None:
            info["Author"] = author
        if subject is not None:
            info["Subject"] = subject
        if creator is not None:
            info["Creator"] = creator
        info["Producer"] = self.config.producer
        if creation_date is not None:
            info["CreationDate"] = creation_date.strftime("D:%Y%m%d%H%M%S")

        if self._info is None:
            self._info = self.registry.register(info)
        else:
            self.registry.resolve(self._info, info)
        return self._info

    # ==================== Pages ====================

    def new_page(self, width: Optional[Coordinate] = None, height: Optional[Coordinate] = None) -> Page:
        """Start a new page; drawing operators go to it from now on.

        Args:
            width: Page width in points (config default if omitted)
            height: Page height in points (config default if omitted)

        Returns:
            The new Page
        """
        self._require_open("add pages")
        width = self.config.page_width if width is None else width
        height = self.config.page_height if height is None else height
        if width <= 0 or height <= 0:
            raise ValueError(f"Page size must be positive, got {width}x{height}")

        handle = self.registry.register()
        content = self.registry.register()
        page = Page(handle, content, Rect.from_size(width, height), self.page_tree)
        self.pages.append(page)
        self._current_page = page
        logger.debug(f"Page {len(self.pages)} started ({width}x{height}), object {handle.number}")
        return page

    @property
    def current_page(self) -> Page:
        """Page receiving drawing operators.

        Raises:
            DocumentStateError: If no page was started or the document is closed
        """
        self._require_open("draw")
        if self._current_page is None:
            raise DocumentStateError("No current page; call new_page() first")
        return self._current_page

    # ==================== Output ====================

    def finalize(self) -> None:
        """Resolve pages, content streams and the page tree; stop accepting objects.

        Raises:
            InvalidHandleError: If an object embeds a reference from another document
            DocumentStateError: If the document was already written
        """
        if self.state is DocumentState.FINALIZING:
            return
        self._require_open("finalize")

        for page in self.pages:
            self.registry.resolve(page.content, Stream(page.content_bytes()))
            self.registry.resolve(page.handle, page)
        self.registry.resolve(self.page_tree, {
            "Type": Name("Pages"),
            "Kids": [page.handle for page in self.pages],
            "Count": len(self.pages),
        })
        self.registry.validate_references()
        self.registry.freeze()
        self.state = DocumentState.FINALIZING
        logger.debug(f"Document finalized with {len(self.pages)} pages, {len(self.registry)} objects")

    def write_to(self, sink: Optional[BinaryIO] = None) -> int:
        """Finalize the document and write it.

        The sink is flushed but not closed.

        Args:
            sink: Binary output; the sink given to the constructor if omitted

        Returns:
            Number of bytes written

        Raises:
            UninitializedSinkError: If there is no sink
            PdfIOError: If writing fails; ``bytes_written`` tells how much was written
            DocumentStateError: If the document was already written
        """
        if self.state in (DocumentState.WRITTEN, DocumentState.FAILED):
            raise DocumentStateError(f"Cannot write: document is {self.state.value}")
        sink = sink if sink is not None else self.sink
        if sink is None:
            raise UninitializedSinkError("No output sink; pass one to write_to() or Document()")

        self.finalize()
        writer = DocumentWriter(sink)
        try:
            writer.write_document(
                self.registry,
                root=self.catalog,
                info=self._info,
                version=self.config.pdf_version,
            )
            flush = getattr(sink, "flush", None)
            if callable(flush):
                try:
                    flush()
                except Exception as e:
                    raise PdfIOError(f"Flush failed: {e}", bytes_written=writer.offset, cause=e) from e
        except Exception as e:
            self.state = DocumentState.FAILED
            self.bytes_written = writer.offset
            logger.error(f"Writing document failed after {writer.offset} bytes: {e}")
            raise

        self.state = DocumentState.WRITTEN
        self.bytes_written = writer.offset
        logger.info(f"Wrote {len(self.pages)} pages, {len(self.registry)} objects, {writer.offset} bytes")
        return writer.offset

    def save(self, path: Union[str, Path]) -> int:
        """Write the document to a file, closing it on every exit path.

        Returns:
            Number of bytes written
        """
        path = Path(path)
        try:
            fh = open(path, "wb")
        except OSError as e:
            raise PdfIOError(f"Cannot open {path} for writing: {e}", cause=e) from e
        with fh:
            return self.write_to(fh)
