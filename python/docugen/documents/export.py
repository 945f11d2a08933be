"""Standalone HTML export, export filenames and PDF payload decoding."""

import base64
import binascii
import re

from jinja2 import Environment

from docugen.documents.models import Document
from docugen.errors import DocumentProcessingError

_WHITESPACE = re.compile(r"\s+")
_DATA_URL_PREFIX = re.compile(r"^data:application/pdf;base64,", re.IGNORECASE)

STANDALONE_HTML_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{{ title }}</title>
  <style>
    body { font-family: sans-serif; line-height: 1.6; padding: 2em; }
    table { border-collapse: collapse; width: 100%; margin: 1em 0; }
    th, td { border: 1px solid #ddd; padding: 8px; text-align: left; }
    th { background-color: #f2f2f2; }
    h1, h2, h3 { color: #333; }
  </style>
</head>
<body>
  <h1>{{ title }}</h1>
  {{ content | safe }}
</body>
</html>
"""

_template = Environment(autoescape=True).from_string(STANDALONE_HTML_TEMPLATE)


def export_filename(title: str, extension: str) -> str:
    """``"Work Order: Painting"`` -> ``"Work_Order:_Painting.html"``."""
    return f"{_WHITESPACE.sub('_', title)}.{extension.lstrip('.')}"


def render_standalone_html(document: Document) -> str:
    """Wrap a document in a minimal page; content goes in untouched."""
    return _template.render(title=document.title, content=document.content)


def decode_pdf_content(encoded: str) -> bytes:
    """
    Decode the base64 PDF returned by the rendering prompt.

    Raises:
        DocumentProcessingError: If the string is not valid base64 or is empty
    """
    cleaned = _WHITESPACE.sub("", _DATA_URL_PREFIX.sub("", encoded.strip()))
    try:
        pdf_bytes = base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DocumentProcessingError(f"PDF content is not valid base64: {e}") from e

    if not pdf_bytes:
        raise DocumentProcessingError("PDF content is empty")
    return pdf_bytes
