"""PyMuPDF adapter.

Implements PDFPort interface using fitz (PyMuPDF). Documents arrive
as uploaded bytes and slices leave as bytes, nothing touches disk.
"""
import logging
from typing import Optional, Sequence

import fitz

from teachplan.core.ports.pdf import PDFPort
from teachplan.core.exceptions import DocumentProcessingError

logger = logging.getLogger(__name__)


class PyMuPDFAdapter(PDFPort):
    """PyMuPDF implementation of PDFPort.

    Directly uses fitz library for PDF operations.
    """

    def get_page_count(self, data: bytes) -> int:
        """Get total page count.

        Args:
            data: Raw PDF bytes

        Returns:
            Number of pages in the PDF
        """
        try:
            with fitz.open(stream=data, filetype="pdf") as doc:
                return len(doc)
        except Exception as e:
            raise DocumentProcessingError(f"Failed to open PDF: {e}") from e

    def slice_pages(self, data: bytes, page_indices: Sequence[int]) -> Optional[bytes]:
        """Copy the given pages, in the given order, into a new PDF.

        Args:
            data: Raw PDF bytes
            page_indices: Zero-based page indices

        Returns:
            Serialized sub-document, or None when page_indices is empty
        """
        if not page_indices:
            return None

        try:
            with fitz.open(stream=data, filetype="pdf") as src, fitz.open() as out:
                page_count = len(src)
                for index in page_indices:
                    if not 0 <= index < page_count:
                        raise IndexError(f"page index {index} out of range (0-{page_count - 1})")
                    out.insert_pdf(src, from_page=index, to_page=index)
                sliced = out.tobytes(garbage=3, deflate=True)
        except Exception as e:
            raise DocumentProcessingError(
                f"Failed to slice pages {list(page_indices)}: {e}"
            ) from e

        logger.debug(f"Sliced {len(page_indices)} pages into {len(sliced):,} bytes")
        return sliced
