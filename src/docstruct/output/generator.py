"""Output Stage - Write a document's projections to storage.

Layout under ``{object_name}/{output_prefix}/``:
- page-{n}/response.json  raw blocks of page n (tagged)
- page-{n}/text.txt       page text
- page-{n}/forms.csv      key/value pairs (optional)
- page-{n}/tables.csv     tables (optional)
- fullresponse.json       raw response (tagged), written last

``fullresponse.json`` marks a complete output set: it is only written once
every page succeeded.
"""

import logging
from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, Field

from docstruct.config import settings
from docstruct.errors import EmptyDocumentError
from docstruct.models import AnalyzeResponse, Document, Page
from docstruct.output import projections
from docstruct.pipeline import DocumentAssembler
from docstruct.storage import StorageWriter

logger = logging.getLogger(__name__)


class OutputResult(BaseModel):
    """Outcome of writing a document's outputs."""

    success: bool
    document_id: str
    page_count: int = 0
    written: list[str] = Field(default_factory=list)
    error: Optional[str] = None


class OutputGenerator:
    """Writes the projections of a Document, built from raw responses or given."""

    def __init__(
        self,
        storage: StorageWriter,
        document_id: str,
        object_name: str,
        responses: Iterable[AnalyzeResponse] = (),
        include_forms: Optional[bool] = None,
        include_tables: Optional[bool] = None,
        output_prefix: Optional[str] = None,
        document: Optional[Document] = None,
    ):
        """Initialize output generator.

        Args:
            storage: Destination for the payloads.
            document_id: Identifier used in logs and results.
            object_name: Source object name; outputs are written beneath it.
            responses: Raw analysis responses for the document.
            include_forms: Write forms.csv per page. Defaults to settings.
            include_tables: Write tables.csv per page. Defaults to settings.
            output_prefix: Directory under object_name. Defaults to settings.
            document: Already assembled document. When given, ``responses``
                is not assembled again.
        """
        self.storage = storage
        self.document_id = document_id
        self.object_name = object_name
        self.responses = list(responses)
        self.include_forms = settings.include_forms if include_forms is None else include_forms
        self.include_tables = settings.include_tables if include_tables is None else include_tables
        prefix = output_prefix or settings.output_prefix
        self.output_path = f"{object_name}/{prefix}"
        self._document: Optional[Document] = document

    @property
    def document(self) -> Document:
        """The document, assembled from the responses on first access unless given."""
        if self._document is None:
            self._document = DocumentAssembler().assemble(self.responses)
        return self._document

    def page_path(self, page_number: int, name: str) -> str:
        return f"{self.output_path}/page-{page_number}/{name}"

    def write_outputs(self, tags: Optional[dict[str, str]] = None) -> OutputResult:
        """Write all projections of the document.

        Args:
            tags: Tags attached to the raw response payloads.

        Returns:
            OutputResult. On failure ``success`` is False, ``error`` holds the
            reason, and ``written`` lists the payloads written before it. Those
            do not form a complete set: fullresponse.json is never written
            after a failure.
        """
        written: list[str] = []
        try:
            document = self.document
            if document.is_empty:
                raise EmptyDocumentError(self.document_id)

            for page_number, page in enumerate(document.pages, start=1):
                self._write_page(page, page_number, tags, written)

            if settings.log_raw_response:
                logger.debug("Serialized response: %s", projections.response_json(document))
            path = f"{self.output_path}/fullresponse.json"
            self.storage.write_text(projections.response_json(document), path, tags)
            written.append(path)
        except Exception as e:
            logger.error("Failed to write outputs for document %s: %s", self.document_id, e)
            return OutputResult(
                success=False,
                document_id=self.document_id,
                page_count=self._document.page_count if self._document is not None else 0,
                written=written,
                error=str(e),
            )

        logger.info(
            "Wrote %d outputs for document %s (%d pages)",
            len(written),
            self.document_id,
            document.page_count,
        )
        return OutputResult(
            success=True,
            document_id=self.document_id,
            page_count=document.page_count,
            written=written,
        )

    def _write_page(
        self,
        page: Page,
        page_number: int,
        tags: Optional[dict[str, str]],
        written: list[str],
    ) -> None:
        """Write one page's payloads, recording each path once written."""
        path = self.page_path(page_number, "response.json")
        self.storage.write_text(projections.page_blocks_json(page), path, tags)
        written.append(path)

        path = self.page_path(page_number, "text.txt")
        self.storage.write_text(projections.page_text(page), path)
        written.append(path)

        if self.include_forms:
            path = self.page_path(page_number, "forms.csv")
            csv_text = projections.to_csv(projections.form_rows(page), header=projections.FORM_HEADER)
            self.storage.write_text(csv_text, path)
            written.append(path)

        if self.include_tables:
            path = self.page_path(page_number, "tables.csv")
            self.storage.write_text(projections.to_csv(projections.table_rows(page)), path)
            written.append(path)
