"""
Resume text extraction.

PDFs go through PyMuPDF and DOCX files through python-docx. Either can fail on
damaged or exotic files, so each has a raw-byte fallback that recovers
whatever readable text it can. Neither fallback is a real parser.
"""
import io
import logging
import re
import zipfile
from typing import Optional

import fitz  # PyMuPDF
from docx import Document
from docx.opc.exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

PDF_FALLBACK_MESSAGE = (
    "PDF text extraction requires additional libraries. "
    "Please use plain text or provide API key for advanced parsing."
)

_PDF_TEXT_OBJECT = re.compile(r"BT\s*(.*?)\s*ET", re.DOTALL)
_NON_PRINTABLE = re.compile(r"[^\x20-\x7E\n]")
_WHITESPACE = re.compile(r"\s+")


class UnsupportedFileTypeError(ValueError):
    """Raised for uploads that are neither PDF nor Word documents."""


def detect_file_kind(filename: str, content_type: Optional[str]) -> Optional[str]:
    """
    "pdf", "docx" or None. The content type decides first; the extension is
    only consulted when the content type names neither format.
    """
    if content_type == PDF_CONTENT_TYPE:
        return "pdf"
    if "document" in (content_type or ""):
        return "docx"

    name = filename.lower()
    if name.endswith(".docx"):
        return "docx"
    if name.endswith(".pdf"):
        return "pdf"
    return None


def is_supported_upload(filename: str, content_type: Optional[str]) -> bool:
    """Whether the upload is a PDF or a Word document."""
    return detect_file_kind(filename, content_type) is not None


def extract_text_from_file(filename: str, content_type: Optional[str], data: bytes) -> str:
    """
    Extract plain text from an uploaded resume.

    Args:
        filename: Original file name (used when the content type is missing)
        content_type: MIME type sent with the upload
        data: Raw file bytes

    Returns:
        The extracted text. For PDFs with no recoverable text this is the
        fixed PDF_FALLBACK_MESSAGE rather than an error.

    Raises:
        UnsupportedFileTypeError: if the file is neither PDF nor DOCX
    """
    kind = detect_file_kind(filename, content_type)
    if kind == "pdf":
        return extract_pdf_text(data)
    if kind == "docx":
        return extract_docx_text(data)
    raise UnsupportedFileTypeError("Unsupported file type")


# ============================================================================
# PDF
# ============================================================================

def extract_pdf_text(pdf_bytes: bytes) -> str:
    text = ""
    try:
        pdf_document = fitz.open(stream=pdf_bytes, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        logger.warning(f"PyMuPDF could not open PDF, scraping raw bytes: {e}")
    else:
        with pdf_document:
            text = "\n".join(page.get_text() for page in pdf_document).strip()

    if text:
        return text
    return scrape_pdf_text_objects(pdf_bytes)


def scrape_pdf_text_objects(pdf_bytes: bytes) -> str:
    """
    Pull literal strings out of uncompressed BT ... ET text objects.

    Only works for PDFs whose content streams are not compressed.
    """
    raw = pdf_bytes.decode("utf-8", errors="replace")
    fragments = []
    for match in _PDF_TEXT_OBJECT.finditer(raw):
        fragment = re.sub(r"BT\s*|\s*ET", "", match.group(0))
        fragment = re.sub(r"Tj\s*", " ", fragment)
        fragment = re.sub(r"[()]", "", fragment)
        fragments.append(fragment)

    if not fragments:
        return PDF_FALLBACK_MESSAGE
    return " ".join(fragments)


# ============================================================================
# DOCX
# ============================================================================

def extract_docx_text(docx_bytes: bytes) -> str:
    try:
        document = Document(io.BytesIO(docx_bytes))
    except (PackageNotFoundError, zipfile.BadZipFile, KeyError, ValueError) as e:
        logger.warning(f"python-docx could not read document, using printable bytes: {e}")
        return printable_text(docx_bytes)

    lines = [paragraph.text for paragraph in document.paragraphs if paragraph.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
            if cells:
                lines.append(" | ".join(cells))

    text = "\n".join(lines).strip()
    return text or printable_text(docx_bytes)


def printable_text(data: bytes) -> str:
    """Keep printable ASCII only, collapsing whitespace runs to single spaces."""
    raw = data.decode("utf-8", errors="replace")
    return _WHITESPACE.sub(" ", _NON_PRINTABLE.sub(" ", raw)).strip()
