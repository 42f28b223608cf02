"""PDF port interface.

Defines the contract for PDF operations. Core code depends only on this
abstraction, not on specific implementations like PyMuPDF.
"""
from abc import ABC, abstractmethod
from typing import Optional, Sequence


class PDFPort(ABC):
    """Abstract interface for PDF operations.

    Implementations: PyMuPDFAdapter
    """

    @abstractmethod
    def get_page_count(self, data: bytes) -> int:
        """Get total page count.

        Args:
            data: Raw PDF bytes

        Returns:
            Number of pages

        Raises:
            DocumentProcessingError: If the document cannot be opened
        """
        pass

    @abstractmethod
    def slice_pages(self, data: bytes, page_indices: Sequence[int]) -> Optional[bytes]:
        """Build a new PDF holding only the given pages.

        Pages are copied in the order given; callers sort beforehand
        if page order matters.

        Args:
            data: Raw PDF bytes
            page_indices: Zero-based page indices

        Returns:
            Serialized sub-document, or None when page_indices is empty

        Raises:
            DocumentProcessingError: If reading or re-encoding fails
        """
        pass
