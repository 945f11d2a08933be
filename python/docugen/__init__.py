"""DocuGen: insurance estimate PDFs to editable project documents."""
