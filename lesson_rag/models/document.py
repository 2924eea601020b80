"""Document data model."""

from pydantic import BaseModel


class Document(BaseModel):
    """A lesson document as handed over by the lesson subsystem.

    The RAG core only reads documents; it never creates or modifies them.
    """

    id: str
    text: str = ""
    title: str = ""
    description: str = ""
