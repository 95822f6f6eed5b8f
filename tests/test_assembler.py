"""Tests for page and document assembly."""

import pytest

from blocks import block, cell, key, line, page, response, table, value, word
from docstruct.models import AnalyzeResponse, BlockType, FormField, Line, Table
from docstruct.pipeline import (
    DocumentAssembler,
    PageAssembler,
    build_block_index,
    build_document,
)
from docstruct.pipeline.assembler import PAGE_HANDLERS


class TestPageHandlers:
    """Tests for the block-kind dispatch table."""

    def test_every_block_type_handled(self):
        assert set(PAGE_HANDLERS) == set(BlockType)


class TestPageAssembler:
    """Tests for single-page assembly."""

    def test_page_id_and_geometry(self, sample_response):
        doc = build_document(sample_response)
        pg = doc.pages[0]

        assert pg.id == "p1"
        assert pg.geometry is not None

    def test_full_text(self):
        doc = build_document(
            response(page("p1"), line("l1", "Hello"), line("l2", "World"))
        )

        assert doc.pages[0].text == "Hello\nWorld\n"

    def test_content_follows_source_order(self, sample_response):
        pg = build_document(sample_response).pages[0]

        assert [type(item) for item in pg.content] == [Line, FormField, FormField, Table, Line]
        assert [item.id for item in pg.content] == ["l1", "k1", "k2", "t1", "l2"]

    def test_collections(self, sample_response):
        pg = build_document(sample_response).pages[0]

        assert [ln.text for ln in pg.lines] == ["Application Form", "Thank you"]
        assert [f.key_text for f in pg.form.fields] == ["First Name", "Married"]
        assert pg.form.get_field_by_key("Married").value_text == "SELECTED"
        assert len(pg.tables) == 1
        assert [row.texts for row in pg.tables[0].rows] == [
            ["Item ", "Qty "],
            ["Apples ", "3 "],
        ]

    def test_key_value_pair(self, form_response):
        pg = build_document(form_response).pages[0]

        field = pg.form.fields[0]
        assert field.key_text == "First Name:"
        assert field.value_text == "Jane"

    def test_value_blocks_not_in_content(self, form_response):
        """VALUE key/value sets appear only as their key's value."""
        pg = build_document(form_response).pages[0]

        assert "v1" not in [item.id for item in pg.content]
        assert len(pg.form.fields) == 1

    def test_empty_key_is_dropped(self):
        doc = build_document(
            response(
                page("p1"),
                line("l1", "Text"),
                key("k1", children=[], values=["v1"]),
                value("v1", children=["w1"]),
                word("w1", "orphan"),
            )
        )
        pg = doc.pages[0]

        assert pg.form.fields == []
        assert len(pg.content) == 1

    def test_unresolved_references_are_absent(self):
        doc = build_document(
            response(
                page("p1"),
                line("l1", "Hi there", children=["w1", "missing"]),
                word("w1", "Hi"),
                key("k1", children=["w1", "gone"], values=["nowhere"]),
                table("t1", children=["c1", "ghost"]),
                cell("c1", 1, 1, children=["void"]),
            )
        )
        pg = doc.pages[0]

        assert [w.id for w in pg.lines[0].words] == ["w1"]
        assert pg.form.fields[0].key_text == "Hi"
        assert pg.form.fields[0].value is None
        assert [[c.id for c in r.cells] for r in pg.tables[0].rows] == [["c1"]]
        assert pg.tables[0].rows[0].cells[0].content == []

    def test_unknown_block_kinds_ignored(self):
        doc = build_document(
            response(
                page("p1"),
                block("q1", "QUERY"),
                block("m1", "MERGED_CELL"),
                line("l1", "kept"),
            )
        )

        pg = doc.pages[0]
        assert [item.id for item in pg.content] == ["l1"]
        assert [b.id for b in pg.blocks] == ["p1", "q1", "m1", "l1"]

    def test_duplicate_keys(self):
        """Both fields stay listed; the lookup returns the last one."""
        doc = build_document(
            response(
                page("p1"),
                key("k1", children=["w1"], values=["v1"]),
                key("k2", children=["w2"], values=["v2"]),
                word("w1", "Date"),
                word("w2", "Date"),
                value("v1", children=["w3"]),
                value("v2", children=["w4"]),
                word("w3", "Monday"),
                word("w4", "Friday"),
            )
        )
        form = doc.pages[0].form

        assert [f.value_text for f in form.fields] == ["Monday", "Friday"]
        assert form.get_field_by_key("Date").value_text == "Friday"
        assert form.get_field_by_key("Time") is None
        assert len(form.search_fields_by_key("date")) == 2

    def test_page_assembler_direct(self, form_response):
        parsed = AnalyzeResponse.model_validate(form_response)
        index = build_block_index([parsed])

        pg = PageAssembler().assemble(parsed.blocks, index)

        assert pg.id == "p1"
        assert len(pg.lines) == 2


class TestDocumentAssembler:
    """Tests for document assembly."""

    def test_is_deterministic(self, sample_response):
        first = build_document(sample_response)
        second = build_document(sample_response)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_pages_in_order(self):
        doc = build_document(
            response(
                page("p1"),
                line("l1", "one"),
                page("p2"),
                line("l2", "two"),
                pages=2,
            )
        )

        assert doc.page_count == 2
        assert [pg.id for pg in doc.pages] == ["p1", "p2"]
        assert doc.text == "one\ntwo\n"

    def test_no_page_block(self):
        """Blocks without a PAGE block still make one page."""
        doc = build_document(response(line("l1", "orphan"), line("l2", "lines")))

        assert doc.page_count == 1
        pg = doc.pages[0]
        assert pg.id is None
        assert pg.geometry is None
        assert pg.text == "orphan\nlines\n"

    def test_multiple_responses(self):
        """Relationships resolve across responses."""
        doc = build_document(
            response(page("p1"), line("l1", "Hello", children=["w1"])),
            response(word("w1", "Hello"), page("p2"), line("l2", "Bye")),
        )

        assert doc.page_count == 2
        assert doc.pages[0].lines[0].words[0].text == "Hello"
        assert len(doc.responses) == 2

    def test_empty_response(self):
        doc = DocumentAssembler().assemble([])

        assert doc.is_empty
        assert doc.page_count == 0

    def test_missing_geometry_propagates(self):
        raw = response(page("p1"), {"Id": "l1", "BlockType": "LINE", "Text": "x"})

        with pytest.raises(ValueError, match="l1"):
            build_document(raw)

    def test_model_dump_excludes_raw_blocks(self, sample_response):
        dumped = build_document(sample_response).model_dump()

        assert "responses" not in dumped
        assert "blocks" not in dumped["pages"][0]
        assert dumped["pages"][0]["content"][1]["kind"] == "field"
