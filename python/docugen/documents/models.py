"""Document models shared by both response pipelines."""

from enum import Enum

from pydantic import BaseModel, Field

FALLBACK_TITLE = "Generated Document"


class ReportFormat(str, Enum):
    """Response contract requested from the model."""

    JSON = "json"
    MARKDOWN = "markdown"


class Document(BaseModel):
    """A titled HTML document shown as one editor tab."""

    title: str
    content: str = Field(description="HTML fragment (headings, lists, tables)")


class DocumentSet(BaseModel):
    """
    Ordered documents plus the index of the selected one.

    Mutated only through ``update_content`` (user edit) and ``select``
    (tab switch). A new parse replaces the whole set.
    """

    documents: list[Document] = Field(default_factory=list)
    selected_index: int = 0

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.documents):
            raise IndexError(f"Document index {index} out of range")

    @property
    def selected(self) -> Document | None:
        """Currently selected document, if any."""
        if not self.documents:
            return None
        return self.documents[self.selected_index]

    def select(self, index: int) -> Document:
        """Switch the active document."""
        self._check_index(index)
        self.selected_index = index
        return self.documents[index]

    def update_content(self, index: int, html: str) -> Document:
        """Store edited HTML verbatim; the title is kept."""
        self._check_index(index)
        document = self.documents[index]
        document.content = html
        return document

    def titles(self) -> list[str]:
        return [doc.title for doc in self.documents]
