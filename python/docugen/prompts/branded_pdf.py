"""Prompt template for rendering an edited document as a branded PDF."""

from docugen.config import Settings

BRANDED_PDF_PROMPT = """You are a professional document designer. Your task is to create a branded PDF document from the provided HTML content and company branding information.

**Company Branding Information:**
- Company Name: {company_name}
- Address: {address}
- Phone: {phone}
- Email: {email}
- Website: {website}
- Certifications: {certifications}
- Font: Arial, Helvetica, sans-serif
- Primary Color: Use a professional, print-safe deep red for accents (e.g., headers).
- Neutral Color: #111111 for body text.

**Instructions:**
1. Create a professional, clean, and modern layout for the PDF.
2. Add a header to each page that includes the company name and contact information. A simple, clean footer with the website and page number is also appropriate.
3. Use the specified fonts and colors to style the document.
4. The main content of the document is provided below in HTML format. Render this HTML content as the body of the PDF.
5. The final output must be a single JSON object containing the base64-encoded string of the generated PDF file. Do not include any other text or explanation.

**Document Title:** {title}

**HTML Content to include in the PDF body:**
```html
{html_content}
```
"""

PDF_RENDER_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "pdfContent": {
            "type": "STRING",
            "description": "The base64 encoded string of the generated PDF file.",
        },
    },
    "required": ["pdfContent"],
}


def build_branded_pdf_prompt(title: str, html_content: str, settings: Settings) -> str:
    """
    Build the PDF rendering prompt with the configured company branding.

    Args:
        title: Document title
        html_content: Edited document HTML, sent as-is
        settings: Source of the branding fields

    Returns:
        Formatted prompt string
    """
    return BRANDED_PDF_PROMPT.format(
        company_name=settings.company_name,
        address=settings.company_address,
        phone=settings.company_phone,
        email=settings.company_email,
        website=settings.company_website,
        certifications=", ".join(settings.company_certifications),
        title=title,
        html_content=html_content,
    )
