from teachplan.adapters.pdf.pymupdf import PyMuPDFAdapter

__all__ = ["PyMuPDFAdapter"]
